"""Date helpers."""

from datetime import date, datetime, timezone


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def age_in_years(date_of_birth: date, today: date | None = None) -> int:
    """
    Whole years elapsed since ``date_of_birth``.

    Example:
        >>> age_in_years(date(1990, 6, 15), today=date(2020, 6, 14))
        29
    """
    today = today or utc_today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age
