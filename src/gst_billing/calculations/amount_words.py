"""
Amount in words (Indian numbering system)

Renders a rupee amount the way it is printed on a tax invoice:
Crore / Lakh / Thousand grouping, then "Rupees", then an optional
"and ... Paisa" clause, then "Only".
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
]

TEENS = [
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen",
    "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]

TENS = [
    "", "", "Twenty", "Thirty", "Forty", "Fifty",
    "Sixty", "Seventy", "Eighty", "Ninety",
]

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000

ZERO_RUPEES = "Zero Rupees Only"

Amount = Union[int, float, Decimal]


def _convert_hundreds(num: int) -> str:
    """Words for 0-999, each word followed by a space"""
    result = ""

    if num >= 100:
        result += ONES[num // 100] + " Hundred "
        num %= 100

    if num >= 20:
        result += TENS[num // 10] + " "
        num %= 10
    elif num >= 10:
        return result + TEENS[num - 10] + " "

    if num > 0:
        result += ONES[num] + " "

    return result


def _convert_integer(rupees: int) -> str:
    result = ""

    if rupees >= CRORE:
        crores = rupees // CRORE
        # No Arab/Kharab: large crore counts are spelled with the same grouping
        if crores >= 1000:
            result += _convert_integer(crores) + "Crore "
        else:
            result += _convert_hundreds(crores) + "Crore "
        rupees %= CRORE

    if rupees >= LAKH:
        result += _convert_hundreds(rupees // LAKH) + "Lakh "
        rupees %= LAKH

    if rupees >= THOUSAND:
        result += _convert_hundreds(rupees // THOUSAND) + "Thousand "
        rupees %= THOUSAND

    if rupees > 0:
        result += _convert_hundreds(rupees)

    return result


def _to_decimal(amount: Amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        return Decimal(repr(amount))
    return Decimal(amount)


def amount_to_words(amount: Amount) -> str:
    """
    Convert an amount to Indian-English words

    Examples:
        >>> amount_to_words(1001.50)
        'One Thousand One Rupees and Fifty Paisa Only'
        >>> amount_to_words(100000)
        'One Lakh Rupees Only'

    Args:
        amount: Non-negative amount in rupees

    Returns:
        Words string; never raises for finite input
    """
    value = _to_decimal(amount)

    if not value.is_finite() or value == 0:
        return ZERO_RUPEES

    if value < 0:
        return "Minus " + amount_to_words(-value)

    rupees = int(value)
    paisa = int(((value - rupees) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    result = _convert_integer(rupees) + "Rupees"

    if paisa > 0:
        result += " and " + _convert_hundreds(paisa) + "Paisa"

    result += " Only"

    return result.strip()
