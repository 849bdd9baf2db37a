# storefront/domain/money.py
from decimal import Decimal

from babel.numbers import format_currency
from pydantic import BaseModel

from storefront.utils.settings import CURRENCY_CODE, CURRENCY_LOCALE


def format_money(amount: int, currency_code: str = CURRENCY_CODE, locale: str = CURRENCY_LOCALE) -> str:
    """
    Render an amount in minor units, e.g. 123450 -> "$1,234.50".
    """
    return format_currency(Decimal(amount) / 100, currency_code.upper(), locale=locale)


class Money(BaseModel):
    amount: int
    formatted: str

    @classmethod
    def of(cls, amount: int, currency_code: str = CURRENCY_CODE) -> "Money":
        return cls(amount=amount, formatted=format_money(amount, currency_code))
