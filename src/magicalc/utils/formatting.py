"""Display formatting helpers.

Pure, stateless presentation functions shared by the state machine and the
host shells.
"""

from datetime import datetime


def format_with_thousands_separator(number: int, separator: str = ",") -> str:
    """Group the decimal digits of ``number`` by three from the right.

    Locale independent: 2161418 -> "2,161,418", -809 -> "-809".
    """
    sign = "-" if number < 0 else ""
    digits = str(abs(number))

    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)

    return sign + separator.join(groups)


def seconds_text(now: datetime) -> str:
    """Inconspicuous seconds label, e.g. ":07"."""
    return f":{now.second:02d}"


def parse_number(text: str) -> int:
    """Parse a typed decimal literal, falling back to 0 when unparsable."""
    try:
        value = int(text)
    except (TypeError, ValueError):
        return 0
    return value if value >= 0 else 0
