"""Date format strings shared by forms, templates and queries."""
import calendar
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional, Tuple


@dataclass(frozen=True)
class DateFormat:
    input: str = "%Y-%m-%d"       # <input type="date"> values
    month_only: str = "%Y-%m"     # <input type="month"> values
    output: str = "%m.%d.%Y"      # dates shown in tables
    html: str = "%Y-%m-%d"


DATE_FORMATS = DateFormat()


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def start_of_current_month(today: Optional[date] = None) -> str:
    today = today or date.today()
    return month_bounds(today.year, today.month)[0].strftime(DATE_FORMATS.html)


def end_of_current_month(today: Optional[date] = None) -> str:
    today = today or date.today()
    return month_bounds(today.year, today.month)[1].strftime(DATE_FORMATS.html)


def month_name(month: int) -> str:
    return calendar.month_name[month]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
