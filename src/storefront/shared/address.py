from protean.fields import String

from storefront.domain import storefront


@storefront.value_object
class MailingAddress:
    """Copy of a profile address taken when the checkout starts.

    Later edits to the profile do not reach checkouts or orders already
    holding this snapshot.
    """

    name: String(max_length=100)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    postal_code: String(max_length=20)
    country: String(required=True, max_length=100)
    phone: String(max_length=30)

    @classmethod
    def from_address(cls, address) -> "MailingAddress":
        return cls(
            name=address.name,
            street=address.street,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
            phone=address.phone,
        )
