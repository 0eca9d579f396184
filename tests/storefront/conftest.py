import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def cart_service():
    from storefront.cart import reset_cart_service, set_cart_service
    from storefront.cart.fake_service import FakeCartService

    service = FakeCartService()
    set_cart_service(service)
    yield service
    reset_cart_service()


@pytest.fixture(autouse=True)
def gateway():
    from storefront.payments.gateway import reset_gateway, set_gateway
    from storefront.payments.gateway.fake_adapter import FakeGateway

    fake = FakeGateway()
    set_gateway(fake)
    yield fake
    reset_gateway()


@pytest.fixture(autouse=True)
def email():
    from storefront.notification.channel import reset_email_channel, set_email_channel
    from storefront.notification.channel.fake_email import FakeEmailAdapter

    fake = FakeEmailAdapter()
    set_email_channel(fake)
    yield fake
    reset_email_channel()


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------
# Subtotal 100.00; only the jacket carries a Nepal tariff (10% of 50.00)
STANDARD_CART_ITEMS = [
    {
        "id": "item-jacket",
        "quantity": 1,
        "product": {
            "id": "prod-jacket",
            "name": "Rain Jacket",
            "price": 50.0,
            "weight": 0.9,
            "tariff": {"id": "tariff-apparel", "rates": {"Nepal": 10}},
            "category": {"id": "cat-outerwear", "name": "Outerwear"},
        },
    },
    {
        "id": "item-mug",
        "quantity": 2,
        "product": {
            "id": "prod-mug",
            "name": "Enamel Mug",
            "price": 25.0,
            "weight": 0.3,
            "tariff": {"id": "tariff-homeware", "rates": {"Nepal": 0}},
            "category": {"id": "cat-kitchen", "name": "Kitchen"},
        },
    },
]


def make_user(email="shopper@example.com", name="Sita Sharma"):
    from storefront.customer.user import Address, User

    user = User(
        email=email,
        name=name,
        addresses=[
            Address(
                name="Home",
                street="12 Lakeside Road",
                city="Pokhara",
                state="Gandaki",
                postal_code="33700",
                country="Nepal",
                phone="+977-61-555-0101",
            )
        ],
    )
    current_domain.repository_for(User).add(user)
    return current_domain.repository_for(User).find_by_email(email)


@pytest.fixture()
def user():
    return make_user()


@pytest.fixture()
def address_id(user):
    return str(user.addresses[0].id)


@pytest.fixture()
def standard_cart(cart_service, user):
    return cart_service.put_cart(user.email, STANDARD_CART_ITEMS)


@pytest.fixture()
def bdt_rate():
    from storefront.exchange.exchange_rate import ExchangeRate

    return current_domain.repository_for(ExchangeRate).set_rate("BDT", 117.5)


@pytest.fixture()
def service():
    from storefront.checkout.service import CheckoutService

    return CheckoutService()


@pytest.fixture()
def other_user():
    return make_user(email="neighbour@example.com", name="Ram Thapa")


@pytest.fixture()
def standard_items():
    return [dict(item, product=dict(item["product"])) for item in STANDARD_CART_ITEMS]


@pytest.fixture()
def checkout_id(service, user, address_id, standard_cart):
    response = service.create_checkout(address_id, "standard", user)
    assert response.is_successful, response.error_details
    return response.response_data["id"]
