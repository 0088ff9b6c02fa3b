"""Calendar-month arithmetic for subscription periods"""

from calendar import monthrange
from datetime import datetime


def add_months(start: datetime, months: int) -> datetime:
    """
    Add calendar months to a timestamp

    Keeps the day of month when the target month has it, otherwise clamps
    to the last day of that month (Jan 31 + 1 month = Feb 28 or Feb 29).
    Time of day is preserved.
    """
    if months < 0:
        raise ValueError("months must be >= 0")

    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)
