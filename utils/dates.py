"""
utils/dates.py
--------------
Period helpers: month and year ranges, the trailing-months window used by
the income/expense series, and ISO date parsing.
"""

from dataclasses import dataclass
from datetime import date, datetime

from dateutil.relativedelta import relativedelta

from errors import InvalidInput

MIN_YEAR = 2000
MAX_YEAR = 2100
MAX_SERIES_MONTHS = 24

ITALIAN_MONTHS = (
    "gennaio", "febbraio", "marzo", "aprile", "maggio", "giugno",
    "luglio", "agosto", "settembre", "ottobre", "novembre", "dicembre",
)


@dataclass(frozen=True)
class DateRange:
    """Closed interval [start, end] of calendar days."""
    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidInput(f"Range start {self.start} is after end {self.end}")

    def contains(self, day: date | None) -> bool:
        return day is not None and self.start <= day <= self.end

    @classmethod
    def for_month(cls, year: int, month: int) -> "DateRange":
        validate_year(year)
        validate_month(month)
        start = date(year, month, 1)
        return cls(start, start + relativedelta(months=1, days=-1))

    @classmethod
    def for_year(cls, year: int) -> "DateRange":
        validate_year(year)
        return cls(date(year, 1, 1), date(year, 12, 31))


def validate_year(year) -> int:
    if isinstance(year, bool) or not isinstance(year, int) or not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidInput(f"Invalid year: {year!r}")
    return year


def validate_month(month) -> int:
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise InvalidInput("Month must be between 1 and 12")
    return month


def parse_date(value, field: str = "date") -> date:
    """Accept a ``date`` or a ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise InvalidInput(f"Invalid {field} {value!r}. Use YYYY-MM-DD")


def month_label(day: date) -> str:
    """'2026-10' for any day in October 2026."""
    return f"{day.year}-{day.month:02d}"


def italian_month_label(year: int, month: int) -> str:
    """'ottobre 2026'."""
    return f"{ITALIAN_MONTHS[month - 1]} {year}"


def trailing_months(months: int, today: date | None = None) -> list[DateRange]:
    """
    Month ranges for the last ``months`` months including the current one,
    oldest first.
    """
    if isinstance(months, bool) or not isinstance(months, int) or not 1 <= months <= MAX_SERIES_MONTHS:
        raise InvalidInput(f"Months must be between 1 and {MAX_SERIES_MONTHS}")
    first_of_month = (today or date.today()).replace(day=1)
    ranges = []
    for back in range(months - 1, -1, -1):
        start = first_of_month - relativedelta(months=back)
        ranges.append(DateRange.for_month(start.year, start.month))
    return ranges
