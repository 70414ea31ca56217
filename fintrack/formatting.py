from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from fintrack.errors import ConfigError

# code -> (symbol, symbol goes before the number)
CURRENCIES = {
    "rub": ("₽", False),
    "usd": ("$", True),
    "eur": ("€", False),
}

Number = Union[int, float, Decimal]


class Formatter:
    """Renders amounts and dates the way the dashboard shows them: ``85 000 ₽``, ``15.01.2025``."""

    def __init__(self, currency: str = "rub"):
        if currency not in CURRENCIES:
            raise ConfigError(f"Unsupported currency {currency!r}, expected one of {', '.join(CURRENCIES)}")
        self.currency = currency
        self.symbol, self._prefix = CURRENCIES[currency]

    @staticmethod
    def number(value: Number) -> str:
        d = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        whole, frac = f"{abs(d):,.2f}".split(".")
        text = whole.replace(",", " ")
        if frac != "00":
            text = f"{text},{frac}"
        return f"-{text}" if d < 0 else text

    def amount(self, value: Number) -> str:
        text = self.number(value)
        if not self._prefix:
            return f"{text} {self.symbol}"
        if text.startswith("-"):
            return f"-{self.symbol}{text[1:]}"
        return f"{self.symbol}{text}"

    @staticmethod
    def date(value: date) -> str:
        return value.strftime("%d.%m.%Y")
