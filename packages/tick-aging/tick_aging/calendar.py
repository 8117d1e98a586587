"""Calendar arithmetic for a 426-day year of 6-hour days."""
from __future__ import annotations

import math

DAYS_PER_YEAR = 426
DAY_SECONDS = 6 * 3600
YEAR_SECONDS = DAYS_PER_YEAR * DAY_SECONDS


def year_index_of(ut: float) -> int:
    """Zero-based year containing *ut*."""
    return math.floor(ut / YEAR_SECONDS)


def calendar_year(ut: float) -> int:
    """Displayed (1-based) calendar year containing *ut*."""
    return year_index_of(ut) + 1


def birthday_ut(year_index: int, birthday: int) -> float:
    return year_index * YEAR_SECONDS + (birthday - 1) * DAY_SECONDS


def count_birthdays_between(birthday: int, start_ut: float, end_ut: float) -> int:
    """Count occurrences of day-of-year *birthday* in ``(start_ut, end_ut]``.

    The interval is left-exclusive and right-inclusive, so counts over
    consecutive intervals ``(a, b]`` and ``(b, c]`` add up to the count
    over ``(a, c]``.
    """
    if end_ut <= start_ut:
        return 0
    count = 0
    for y in range(year_index_of(start_ut), year_index_of(end_ut) + 1):
        t = birthday_ut(y, birthday)
        if start_ut < t <= end_ut:
            count += 1
    return count


def death_day(death_ut: float) -> tuple[int, int]:
    """Return ``(calendar_year, day_of_year)`` for *death_ut*, both 1-based."""
    year = calendar_year(death_ut)
    year_start = (year - 1) * YEAR_SECONDS
    day = math.floor((death_ut - year_start) / DAY_SECONDS) + 1
    return year, day
