"""
Arabic Numeral Expander

Converts a non-negative amount into formal Arabic words as written on a
banking check, recursively by magnitude: millions, thousands, hundreds,
tens, teens and ones.

The input is floored to a whole number before expansion. Fractional
currency subunits (piastres) are dropped, not rounded and not expanded.
"""

import math
from decimal import Decimal, ROUND_FLOOR
from typing import Union

from .currency import Currency


ZERO = "صفر"
CONJUNCTION = "و"

ONES = ["", "واحد", "اثنان", "ثلاثة", "أربعة", "خمسة", "ستة", "سبعة", "ثمانية", "تسعة"]
TEENS = ["عشرة", "أحد عشر", "اثنا عشر", "ثلاثة عشر", "أربعة عشر",
         "خمسة عشر", "ستة عشر", "سبعة عشر", "ثمانية عشر", "تسعة عشر"]
TENS = ["", "", "عشرون", "ثلاثون", "أربعون", "خمسون", "ستون", "سبعون", "ثمانون", "تسعون"]
HUNDREDS = ["", "مائة", "مائتان", "ثلاثمائة", "أربعمائة",
            "خمسمائة", "ستمائة", "سبعمائة", "ثمانمائة", "تسعمائة"]

# (value, singular, dual, plural) for the counted magnitudes
MAGNITUDES = [
    (1_000_000, "مليون", "مليونان", "ملايين"),
    (1_000, "ألف", "ألفان", "آلاف"),
]

Number = Union[int, float, Decimal]


def _floor(value: Number) -> int:
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Amount must be finite: {value}")
        number = int(value.to_integral_value(rounding=ROUND_FLOOR))
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Amount must be finite: {value}")
        number = math.floor(value)
    else:
        number = int(value)
    if number < 0:
        raise ValueError(f"Amount must be non-negative: {value}")
    return number


def _join(head: str, remainder: int) -> str:
    if remainder == 0:
        return head
    return f"{head} {CONJUNCTION}{_expand(remainder)}"


def _magnitude(count: int, singular: str, dual: str, plural: str) -> str:
    if count == 1:
        return singular
    if count == 2:
        return dual
    if count <= 10:
        return f"{_expand(count)} {plural}"
    return f"{_expand(count)} {singular}"


def _expand(number: int) -> str:
    for value, singular, dual, plural in MAGNITUDES:
        if number >= value:
            head = _magnitude(number // value, singular, dual, plural)
            return _join(head, number % value)

    if number >= 100:
        return _join(HUNDREDS[number // 100], number % 100)

    if number >= 20:
        units = number % 10
        if units:
            return f"{TENS[number // 10]} {CONJUNCTION}{ONES[units]}"
        return TENS[number // 10]

    if number >= 10:
        return TEENS[number - 10]

    return ONES[number]


def number_to_arabic_words(value: Number) -> str:
    """
    Expand a non-negative number into formal Arabic words.

    Args:
        value: Amount to expand; fractional part is discarded

    Returns:
        Words without any currency name

    Raises:
        ValueError: If value is negative or not finite
    """
    number = _floor(value)
    if number == 0:
        return ZERO
    return _expand(number)


def amount_in_words(value: Number, suffix: str = Currency.SDG.formal_name) -> str:
    """Words for a check amount followed by the currency name"""
    words = number_to_arabic_words(value)
    if not suffix:
        return words
    return f"{words} {suffix}"
