"""Repository for the Checkout aggregate."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.checkout.checkout import Checkout, PaymentInfo
from storefront.domain import storefront
from storefront.shared.payment import UNASSIGNED, PaymentType


@storefront.repository(part_of=Checkout)
class CheckoutRepository:
    def find_for_user(self, checkout_id, user_email: str) -> Checkout | None:
        """Return the checkout only when it exists and belongs to ``user_email``."""
        if not checkout_id:
            return None
        try:
            checkout = self.get(str(checkout_id))
        except ObjectNotFoundError:
            return None
        if checkout.user_email != user_email:
            return None
        return checkout

    def find_by_user(self, user_email: str) -> list[Checkout]:
        return self._dao.query.filter(user_email=user_email).all().items

    def find_by_payment(self, source: str, payment_id: str) -> Checkout | None:
        """The checkout holding an authorized ``source`` payment with this id."""
        if not payment_id or payment_id == UNASSIGNED:
            return None
        entries = (
            current_domain.repository_for(PaymentInfo)
            ._dao.query.filter(source=source, payment_id=payment_id, type=PaymentType.AUTHORIZATION.value)
            .all()
            .items
        )
        for entry in entries:
            try:
                return self.get(str(entry.checkout_id))
            except ObjectNotFoundError:
                continue
        return None

    def remove(self, checkout: Checkout) -> None:
        """Delete the checkout together with its payment entries."""
        payment_dao = current_domain.repository_for(PaymentInfo)._dao
        for entry in list(checkout.payment_info):
            payment_dao.delete(entry)
        self._dao.delete(checkout)

    def remove_all_for_user(self, user_email: str) -> int:
        checkouts = self.find_by_user(user_email)
        for checkout in checkouts:
            self.remove(self.get(str(checkout.id)))
        return len(checkouts)
