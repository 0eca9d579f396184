"""User aggregate: the shopper placing the checkout, with their saved addresses.

Users are owned by the account system; checkout only reads them. The
repository is the single lookup path so that every operation re-resolves the
caller by email instead of trusting session data.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import HasMany, String

from storefront.domain import storefront


@storefront.entity(part_of="User")
class Address:
    """A saved delivery address on a user's profile."""

    name: String(max_length=100)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    postal_code: String(max_length=20)
    country: String(required=True, max_length=100)
    phone: String(max_length=30)


@storefront.aggregate
class User:
    email = String(required=True, max_length=254, unique=True)
    name = String(max_length=150)
    addresses = HasMany(Address)

    def find_address(self, address_id) -> Address | None:
        if not address_id:
            return None
        return next((a for a in self.addresses if str(a.id) == str(address_id)), None)


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        if not email:
            return None
        try:
            return self.find_by(email=email)
        except ObjectNotFoundError:
            return None
