"""Formatting helpers for currency (MYR) and dates.

The outputs here are shown verbatim in the app and asserted literally by tests:
``format_currency(1500) == "RM 1,500.00"``, ``format_date("2025-12-25") == "25 Dec 2025"``.
"""

from datetime import date, datetime, time, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from rentverse.config import settings

INVALID_DATE = "Invalid Date"
INVALID_DATE_RANGE = "Invalid Date Range"

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_CENTS = Decimal("0.01")


def _to_decimal(value: object) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        # via str() so 0.1 formats as 0.10 rather than its binary expansion
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    return amount if amount.is_finite() else None


def format_currency(price: Decimal | float | int | str | None) -> str:
    """Format a price with the currency prefix (``settings.currency_symbol``,
    ``RM`` by default), grouping and two decimals.

    Accepts numbers and numeric strings (the core service sends Prisma
    decimals as strings). ``None``, non-finite and unparsable input format as
    ``RM 0.00``. The prefix always comes first: ``RM -1,500.00``.

    >>> format_currency(1234567.89)
    'RM 1,234,567.89'
    """
    symbol = settings.currency_symbol
    amount = _to_decimal(price)
    if amount is None:
        return f"{symbol} 0.00"

    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the cents
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        rounded = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
        formatted = f"{abs(rounded):,.2f}"
    if rounded < 0:
        return f"{symbol} -{formatted}"
    return f"{symbol} {formatted}"


def parse_date(value: date | datetime | str) -> date | datetime | None:
    """Parse a date, datetime or ISO-8601 string. Returns None when invalid."""
    if isinstance(value, (date, datetime)):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    # A bare "YYYY-MM-DD" is a calendar date, not midnight of some timezone.
    if len(text) == 10:
        return parsed.date()
    return parsed


def format_date(value: date | datetime | str, fmt: str | None = None) -> str:
    """Format a date for display, ``25 Dec 2025`` by default.

    Datetimes are shown in their own offset; nothing is converted to local time.
    ``fmt`` is a ``strftime`` pattern for custom output.
    """
    parsed = parse_date(value)
    if parsed is None:
        return INVALID_DATE
    if fmt:
        return parsed.strftime(fmt)
    return f"{parsed.day} {_MONTH_ABBR[parsed.month - 1]} {parsed.year}"


def format_date_range(start: date | datetime | str, end: date | datetime | str) -> str:
    """Format a booking period as ``start - end``."""
    start_text = format_date(start)
    end_text = format_date(end)
    if start_text == INVALID_DATE or end_text == INVALID_DATE:
        return INVALID_DATE_RANGE
    return f"{start_text} - {end_text}"


def to_iso_string(value: date | datetime) -> str:
    """Serialize like JavaScript's ``toISOString``: UTC with milliseconds and ``Z``.

    Dates serialize as midnight; naive datetimes are taken to be UTC.
    """
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def utc_now_iso() -> str:
    return to_iso_string(datetime.now(timezone.utc))
