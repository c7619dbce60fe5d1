"""
Currency Support Module

Parses and formats check amounts with proper Decimal precision.
NEVER uses float for monetary values.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from enum import Enum
import re

# Set global decimal context for financial precision
getcontext().prec = 28


class Currency(Enum):
    """Check currencies with precision and formal name"""
    SDG = ("SDG", 2, "جنيه سوداني")  # Sudanese Pound, 100 piastres

    def __init__(self, code: str, precision: int, formal_name: str):
        self.code = code
        self.precision = precision
        self.formal_name = formal_name


AMOUNT_PATTERN = re.compile(r"[0-9]{1,3}(,[0-9]{3})+(\.[0-9]+)?|[0-9]+(\.[0-9]+)?")


def decimal_from_string(value: str) -> Decimal:
    """
    Strictly convert an entered amount to Decimal

    Accepts plain digits with an optional fractional part, or digits
    grouped in threes by commas ("1,500.50"). Surrounding whitespace and
    an optional SDG code are ignored. Anything else is rejected rather
    than cleaned up, so the parsed value is always the value entered.

    Args:
        value: String representation of number

    Returns:
        Decimal value

    Raises:
        ValueError: If string is not a well-formed amount
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    text = value.strip()
    code = Currency.SDG.code
    if text.upper().startswith(code):
        text = text[len(code):].strip()
    elif text.upper().endswith(code):
        text = text[:-len(code)].strip()

    if not AMOUNT_PATTERN.fullmatch(text):
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    try:
        return Decimal(text.replace(',', ''))
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{value}' to Decimal")


def validate_decimal_precision(value: Decimal, currency: Currency = Currency.SDG) -> Decimal:
    """
    Validate and round decimal to currency precision

    Args:
        value: Decimal to validate
        currency: Currency defining precision

    Returns:
        Properly rounded Decimal
    """
    return value.quantize(
        Decimal('0.1') ** currency.precision,
        rounding=ROUND_HALF_UP
    )


def format_amount(value: Decimal, currency: Currency = Currency.SDG) -> str:
    """Fixed-point text form used for signing and storage, e.g. 1500.00"""
    return f"{validate_decimal_precision(value, currency):.{currency.precision}f}"

