"""Date helpers shared by the validators and the completion step."""

from __future__ import annotations

from datetime import date


def parse_iso_date(value: str | None) -> date | None:
    """Return a ``date`` parsed from ``YYYY-MM-DD`` or ``None``."""

    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def compute_age(birth: date, today: date) -> int:
    """Return the age in whole years on ``today``.

    Calendar subtraction of the years, minus one when ``today`` falls before
    the birthday in the current year. Negative for future birth dates.
    """

    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age


def format_japanese_date(value: date) -> str:
    """Render ``value`` as ``YYYY年M月D日`` without zero padding."""

    return f"{value.year}年{value.month}月{value.day}日"
