from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_user(self, user_email: str) -> list[Order]:
        return self._dao.query.filter(user_email=user_email).all().items
