"""Lenient date parsing for the Application Tracker.

Dates typed by the user are never rejected. Anything that cannot be
parsed is replaced by a documented default:
- application date: today
- closing date: None (no known closing date)
"""

from datetime import date, datetime

# Formats tried after ISO parsing fails, in order
FALLBACK_FORMATS = (
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%Y/%m/%d",
)


def parse_date(value: str | date | None) -> date | None:
    """Parse a calendar date from user input.

    Accepts date and datetime objects (the time of day is dropped) or
    text in ISO form (``yyyy-mm-dd`` or a full ISO timestamp) or one of
    FALLBACK_FORMATS.

    Args:
        value: The value to parse.

    Returns:
        The parsed date, or None if the value is empty or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    for fmt in FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    return None


def parse_application_date(
    value: str | date | None, today: date | None = None
) -> date:
    """Parse an application date, defaulting to today."""
    parsed = parse_date(value)
    if parsed is None:
        return today or date.today()
    return parsed


def parse_closing_date(value: str | date | None) -> date | None:
    """Parse a closing date, defaulting to None."""
    return parse_date(value)
