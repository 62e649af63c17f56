# utils/currency.py
#
# Parsing of loosely formatted money/percent values from stored client
# records, and the currency formatting used in recommendation text.
#
from typing import Union

Number = Union[str, float, int, None]


def clean_currency(val: Number) -> float:
    """
    "$140,000.00" -> 140000.0. Numbers pass through; blanks and anything
    unparseable become 0.0.
    """
    if isinstance(val, (int, float)):
        return float(val)
    if not val:
        return 0.0

    digits = str(val).replace('$', '').replace(',', '').strip()
    try:
        return float(digits) if digits else 0.0
    except ValueError:
        return 0.0


def clean_percent(raw_input: Number) -> Union[float, None]:
    """
    Rate as a decimal: '23%', '23' and 0.23 all give 0.23.
    Values from 1 to 100 are read as percents, anything else as a decimal
    rate already. Blank or unparseable input gives None.
    """
    if raw_input is None:
        return None

    if isinstance(raw_input, (int, float)):
        value = float(raw_input)
    else:
        text = str(raw_input).replace('%', '').replace(',', '').replace(' ', '')
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None

    return value / 100.0 if 1.0 <= value <= 100.0 else value


def format_currency_output(val, decimals=0):
    """
    Formats a number for messages: 1234567 -> "$1,234,567", -50 -> "-$50".

    Args:
        val (float): The numerical value to format (None reads as 0).
        decimals (int): Number of decimal places.
    """
    val = val or 0.0
    sign = "-" if val < 0 else ""
    return f"{sign}${abs(val):,.{decimals}f}"
