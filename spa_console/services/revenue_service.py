"""
Выручка по завершенным записям за день, неделю, месяц и год.
"""

import datetime as dt
from typing import Callable, Iterable, List

from spa_console.schemas.booking import Booking, DailyStats, RevenueSummary
from spa_console.schemas.enums import BookingStatus


def week_bounds(reference_date: dt.date) -> tuple:
    """Понедельник и воскресенье недели, в которую входит дата."""
    monday = reference_date - dt.timedelta(days=reference_date.isoweekday() - 1)
    return monday, monday + dt.timedelta(days=6)


def _sum_where(completed: List[Booking], predicate: Callable[[dt.date], bool]) -> float:
    return sum(b.total_amount or 0 for b in completed if predicate(b.date))


def revenue_summary(bookings: Iterable[Booking], reference_date: dt.date) -> RevenueSummary:
    """
    Считает выручку заново по всему набору записей.

    Учитываются только записи со статусом COMPLETED.
    Неделя - с понедельника по воскресенье включительно.
    """
    completed = [b for b in bookings if b.status == BookingStatus.COMPLETED]
    monday, sunday = week_bounds(reference_date)

    return RevenueSummary(
        day=_sum_where(completed, lambda d: d == reference_date),
        week=_sum_where(completed, lambda d: monday <= d <= sunday),
        month=_sum_where(completed, lambda d: d.year == reference_date.year and d.month == reference_date.month),
        year=_sum_where(completed, lambda d: d.year == reference_date.year),
    )


def daily_stats(bookings: Iterable[Booking], date: dt.date) -> DailyStats:
    """Количество завершенных и отмененных записей за день."""
    day_bookings = [b for b in bookings if b.date == date]
    return DailyStats(
        completed=sum(1 for b in day_bookings if b.status == BookingStatus.COMPLETED),
        cancelled=sum(1 for b in day_bookings if b.status == BookingStatus.CANCELLED),
    )
