"""Indian number and currency formatting for printed invoices"""

from gst_billing.calculations.tax_engine import round_currency

RUPEE_SYMBOL = "₹"


def _group_indian(digits: str) -> str:
    """Group an integer digit string as 12,34,567"""
    if len(digits) <= 3:
        return digits

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)

    return ",".join(groups + [tail])


def format_indian_number(value: float) -> str:
    """
    Format with Indian digit grouping and 2 decimals

    Examples:
        >>> format_indian_number(1234567.891)
        '12,34,567.89'
    """
    amount = round_currency(value)
    sign = "-" if amount < 0 else ""
    integer, _, fraction = f"{abs(amount):.2f}".partition(".")
    return f"{sign}{_group_indian(integer)}.{fraction}"


def format_currency(value: float) -> str:
    """Rupee amount, e.g. 236 -> '₹236.00', -1500 -> '-₹1,500.00'"""
    formatted = format_indian_number(value)
    if formatted.startswith("-"):
        return f"-{RUPEE_SYMBOL}{formatted[1:]}"
    return f"{RUPEE_SYMBOL}{formatted}"
