from calendar import monthrange
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Optional

from models.dashboard import DateRange


class DateRangePreset(str, Enum):
    TODAY = "today"
    THIS_WEEK = "thisWeek"
    THIS_MONTH = "thisMonth"
    LAST_MONTH = "lastMonth"
    CUSTOM = "custom"


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max)


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    return day.replace(day=monthrange(day.year, day.month)[1])


def previous_month(day: date) -> date:
    return start_of_month(start_of_month(day) - timedelta(days=1))


def next_month(day: date) -> date:
    return end_of_month(day) + timedelta(days=1)


def preset_range(preset: DateRangePreset, today: Optional[date] = None) -> DateRange:
    """Resolve a preset to a concrete range; weeks start on Monday, custom falls back to this month."""
    today = today or date.today()
    if preset == DateRangePreset.TODAY:
        return DateRange(start=start_of_day(today), end=end_of_day(today))
    if preset == DateRangePreset.THIS_WEEK:
        monday = today - timedelta(days=today.weekday())
        return DateRange(start=start_of_day(monday), end=end_of_day(monday + timedelta(days=6)))
    if preset == DateRangePreset.LAST_MONTH:
        last = previous_month(today)
        return DateRange(start=start_of_day(last), end=end_of_day(end_of_month(last)))
    return DateRange(start=start_of_day(start_of_month(today)), end=end_of_day(end_of_month(today)))


def resolve_range(preset: DateRangePreset = DateRangePreset.THIS_MONTH, start: Optional[date] = None,
                  end: Optional[date] = None, today: Optional[date] = None) -> DateRange:
    if start is not None and end is not None:
        return DateRange(start=start_of_day(start), end=end_of_day(end))
    return preset_range(preset, today)
