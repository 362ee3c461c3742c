"""Daily totals over a trailing window, for the dashboard charts."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable
from datetime import date, datetime, time, timedelta

from .models import Entity, FoodEntry, MoneyEntry


def _local(ts: datetime) -> datetime:
    # naive timestamps are taken as local time
    return ts.astimezone()


def daily_totals(
    items: Iterable[Entity],
    value: Callable[[Entity], float],
    *,
    now: datetime | None = None,
    days: int = 7,
    zero_fill: bool = False,
) -> list[tuple[date, float]]:
    """Sum ``value`` per local calendar day over the last ``days`` days.

    The window runs from the start of the day ``days - 1`` days before
    ``now`` up to ``now``. Days without entries are left out unless
    ``zero_fill`` is set.

    Returns:
        ``(day, total)`` pairs in ascending day order.
    """
    now = _local(now or datetime.now())
    first_day = now.date() - timedelta(days=days - 1)
    window_start = datetime.combine(first_day, time.min).astimezone()

    totals: dict[date, float] = defaultdict(float)
    for item in items:
        ts = _local(item.timestamp)
        if window_start <= ts <= now:
            totals[ts.date()] += value(item)

    if zero_fill:
        for i in range(days):
            totals.setdefault(first_day + timedelta(days=i), 0)

    return sorted(totals.items())


def money_totals(
    items: Iterable[MoneyEntry], **kwargs
) -> list[tuple[date, float]]:
    return daily_totals(items, lambda e: e.amount, **kwargs)


def food_totals(items: Iterable[FoodEntry], **kwargs) -> list[tuple[date, float]]:
    return daily_totals(items, lambda e: e.calories, **kwargs)


def render_bars(
    series: list[tuple[date, float]], unit: str = "", width: int = 30
) -> str:
    """Format a daily series as one text bar per day."""
    if not series:
        return "No data for this period."
    peak = max(v for _, v in series) or 1
    lines = []
    for day, v in series:
        bar = "█" * int(round(width * v / peak)) if v > 0 else ""
        lines.append(f"  {day.strftime('%m/%d')}  {bar} {v:g}{unit}")
    return "\n".join(lines)
