"""Currency exchange rates quoted against one US dollar."""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, String

from storefront.domain import storefront


@storefront.aggregate
class ExchangeRate:
    currency = String(required=True, max_length=3, unique=True)
    one_usd_equals = Float(required=True, min_value=0.0)

    def convert(self, amount_in_usd: float) -> float:
        return amount_in_usd * self.one_usd_equals


@storefront.value_object
class ExchangeRateSnapshot:
    """The rate in force when a payment entry was issued."""

    currency: String(required=True, max_length=3)
    one_usd_equals: Float(required=True, min_value=0.0)


@storefront.repository(part_of=ExchangeRate)
class ExchangeRateRepository:
    def find_by_currency(self, currency: str) -> ExchangeRate | None:
        try:
            return self.find_by(currency=currency)
        except ObjectNotFoundError:
            return None

    def set_rate(self, currency: str, one_usd_equals: float) -> ExchangeRate:
        """Insert or overwrite the rate for ``currency``."""
        rate = self.find_by_currency(currency)
        if rate is None:
            rate = ExchangeRate(currency=currency, one_usd_equals=one_usd_equals)
        else:
            rate.one_usd_equals = one_usd_equals
        self.add(rate)
        return rate
