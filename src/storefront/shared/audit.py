"""Who created and last touched a Checkout or Order, and when."""

from datetime import UTC, datetime

from protean.fields import DateTime, String, ValueObject

from storefront.domain import storefront

CUSTOMER_ROLE = "Customer"


@storefront.value_object
class Actor:
    email: String(required=True, max_length=254)
    name: String(max_length=50, default=CUSTOMER_ROLE)

    @classmethod
    def customer(cls, email: str) -> "Actor":
        return cls(email=email, name=CUSTOMER_ROLE)


@storefront.value_object
class AuditLog:
    created_by: ValueObject(Actor)
    updated_by: ValueObject(Actor)
    created_on: DateTime()
    updated_on: DateTime()

    @classmethod
    def stamped(cls, actor: Actor, now: datetime | None = None) -> "AuditLog":
        now = now or datetime.now(UTC)
        return cls(created_by=actor, updated_by=actor, created_on=now, updated_on=now)

    def touched(self, actor: Actor | None = None, now: datetime | None = None) -> "AuditLog":
        return AuditLog(
            created_by=self.created_by,
            updated_by=actor or self.updated_by,
            created_on=self.created_on,
            updated_on=now or datetime.now(UTC),
        )
