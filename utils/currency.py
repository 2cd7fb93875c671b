import math
import re

from utils.constants import CURRENCY_SYMBOLS

INVALID_AMOUNT_MESSAGE = "Please enter numbers only (example: 12.34)."

_AMOUNT_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)


class InvalidAmountError(ValueError):
    """Raised when amount text from the add form is not a finite number."""

    def __init__(self, text: str):
        super().__init__(INVALID_AMOUNT_MESSAGE)
        self.text = text


def parse_amount(text: str | None) -> float:
    """Parse user amount text, accepting a decimal comma, e.g. ' 12,50 ' -> 12.5."""
    cleaned = (text or "").strip().replace(",", ".")
    if not _AMOUNT_RE.fullmatch(cleaned):
        raise InvalidAmountError(text or "")
    amount = float(cleaned)
    if not math.isfinite(amount):
        raise InvalidAmountError(text or "")
    return amount


def currency_symbol(code: str) -> str:
    return CURRENCY_SYMBOLS.get(code, f"{code} ")


def format_currency(amount: float, code: str = "USD") -> str:
    """Format a float as currency string, e.g. '$1,234.56' or '-£3.00'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol(code)}{abs(amount):,.2f}"


def format_percent(value: float, total: float) -> str:
    """Truncated whole percentage of total, '' when total is not positive."""
    if total <= 0:
        return ""
    return f"{int(value / total * 100)}%"
