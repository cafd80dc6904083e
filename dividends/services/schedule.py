"""Expansion of dividend schedules into dated payment events."""
from __future__ import annotations

from typing import Iterable, List

from ..models import DividendEvent, StockPosition


def build_events(stocks: Iterable[StockPosition], year: int) -> List[DividendEvent]:
    """Return one year's dividend events for all stocks in payment order.

    Schedules repeat unchanged every year, so ``year`` does not alter the
    events themselves. Events on the same day keep the order of ``stocks``
    and, within a stock, the order of its schedule.
    """

    events: List[DividendEvent] = []
    for stock in stocks:
        if not stock.has_dividends or not stock.dividend_schedule:
            continue
        for entry in stock.dividend_schedule:
            events.append(
                DividendEvent(
                    stock=stock,
                    month=entry.month,
                    day=entry.day,
                    amount=entry.amount,
                )
            )

    # list.sort is stable, ties keep insertion order
    events.sort(key=lambda event: (event.month, event.day))
    return events
