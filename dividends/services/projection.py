"""Multi-year dividend projection with whole-share reinvestment (DRIP)."""
from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..config import DEFAULT_SCENARIOS, PROJECTION_YEARS, REPORTING_CURRENCY
from ..models import (
    DividendEvent,
    MonthProjection,
    ProjectedPayment,
    ProjectionResult,
    ReinvestmentRecord,
    Scenario,
    SimulationState,
    StockPosition,
    YearProjection,
)
from .fx import CurrencyNormalizer
from .schedule import build_events

LOGGER = logging.getLogger(__name__)


class ReinvestmentSimulator:
    """Pays dividends event by event and buys whole shares with the proceeds.

    The simulator owns no state between calls; share counts and uninvested
    cash live in the :class:`SimulationState` handed to it, which the caller
    threads through consecutive years.
    """

    def __init__(
        self,
        annual_growth_rate: float = 0.0,
        normalizer: Optional[CurrencyNormalizer] = None,
    ) -> None:
        self.annual_growth_rate = annual_growth_rate
        self._normalizer = normalizer or CurrencyNormalizer()

    def price_for_year(self, stock: StockPosition, year_index: int) -> float:
        return stock.current_price * (1 + self.annual_growth_rate) ** year_index

    def process_event(
        self,
        event: DividendEvent,
        state: SimulationState,
        year: int,
        year_index: int,
    ) -> Tuple[ProjectedPayment, ReinvestmentRecord]:
        stock = event.stock
        ticker = stock.ticker
        payment_date = f"{year}-{event.month:02d}-{event.day:02d}"

        current_shares = state.shares_by_ticker.get(ticker, stock.initial_shares)
        amount_original = current_shares * event.amount
        amount_reporting = self._normalizer.convert(amount_original, stock.currency)

        payment = ProjectedPayment(
            ticker=ticker,
            name=stock.name,
            amount=amount_reporting,
            currency=REPORTING_CURRENCY,
            date=payment_date,
            shares_at_payment=current_shares,
        )

        # Reinvestment happens in the stock's own currency; only the purchase
        # price grows with the scenario, never the dividend per share.
        adjusted_price = self.price_for_year(stock, year_index)
        total_cash = state.unspent_cash_by_ticker.get(ticker, 0.0) + amount_original
        if adjusted_price > 0:
            new_shares = math.floor(total_cash / adjusted_price)
        else:
            new_shares = 0
        remainder = total_cash - new_shares * adjusted_price

        state.shares_by_ticker[ticker] = current_shares + new_shares
        state.unspent_cash_by_ticker[ticker] = remainder

        record = ReinvestmentRecord(
            ticker=ticker,
            date=payment_date,
            cash_available=total_cash,
            unit_price=adjusted_price,
            shares_bought=new_shares,
            cash_after=remainder,
            shares_after=state.shares_by_ticker[ticker],
        )
        return payment, record

    def run_year(
        self,
        events: Iterable[DividendEvent],
        state: SimulationState,
        year: int,
        year_index: int,
    ) -> YearProjection:
        months = [MonthProjection(month=month) for month in range(1, 13)]
        year_total: Dict[str, float] = {}
        reinvestments: List[ReinvestmentRecord] = []

        for event in events:
            payment, record = self.process_event(event, state, year, year_index)
            bucket = months[event.month - 1]
            bucket.payments.append(payment)
            bucket.total_by_currency[payment.currency] = (
                bucket.total_by_currency.get(payment.currency, 0.0) + payment.amount
            )
            year_total[payment.currency] = year_total.get(payment.currency, 0.0) + payment.amount
            reinvestments.append(record)

        return YearProjection(
            months=months,
            year_total_by_currency=year_total,
            end_of_year_shares=dict(state.shares_by_ticker),
            reinvestments=reinvestments,
        )


def project(
    stocks: Sequence[StockPosition],
    annual_growth_rate: float = 0.0,
    start_year: Optional[int] = None,
    normalizer: Optional[CurrencyNormalizer] = None,
) -> ProjectionResult:
    """Project dividend income for ``start_year`` and the two following years.

    ``annual_growth_rate`` is the fractional yearly change of share prices
    used when buying shares with dividends (``0.1`` is +10% per year). The
    purchase price in the n-th projected year is ``current_price * (1 +
    rate) ** n``. Dividend amounts depend only on the share count.
    """

    first_year = start_year if start_year is not None else date.today().year
    simulator = ReinvestmentSimulator(annual_growth_rate, normalizer=normalizer)
    state = SimulationState.from_stocks(stocks)

    result: ProjectionResult = {}
    for year_index in range(1, PROJECTION_YEARS + 1):
        year = first_year + year_index - 1
        events = build_events(stocks, year)
        result[year] = simulator.run_year(events, state, year, year_index)
        LOGGER.debug(
            "Projected %s (growth %.2f): %d payments, %.2f %s",
            year,
            annual_growth_rate,
            len(events),
            result[year].year_total_by_currency.get(REPORTING_CURRENCY, 0.0),
            REPORTING_CURRENCY,
        )
    return result


def project_scenarios(
    stocks: Sequence[StockPosition],
    scenarios: Sequence[Scenario] = DEFAULT_SCENARIOS,
    start_year: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> Dict[str, ProjectionResult]:
    """Run :func:`project` once per scenario, keyed by scenario name.

    Each run gets its own simulation state, so scenarios are computed in
    parallel. The returned mapping follows the order of ``scenarios``.
    """

    if not scenarios:
        return {}
    first_year = start_year if start_year is not None else date.today().year
    workers = max_workers or len(scenarios)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        results = list(
            executor.map(
                lambda scenario: project(stocks, scenario.annual_growth_rate, first_year),
                scenarios,
            )
        )
    return {scenario.name: result for scenario, result in zip(scenarios, results)}
