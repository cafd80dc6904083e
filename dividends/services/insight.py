"""Portfolio value and income-gap analysis built on top of projections."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..config import (
    DIVIDEND_STOCKS,
    EXAMPLE_SHARES_RANGE,
    EXAMPLE_STOCKS,
    REPORTING_CURRENCY,
)
from ..models import (
    ExampleStock,
    Holding,
    PortfolioValue,
    ProjectionResult,
    StockPosition,
    StockValue,
    SuggestedStock,
)
from .fx import CurrencyNormalizer

ALL_MONTHS = tuple(range(1, 13))


@dataclass(frozen=True)
class LowMonthsAnalysis:
    low_months: Tuple[int, ...]
    average: float


def analyze_low_months(projection: ProjectionResult) -> LowMonthsAnalysis:
    """Find months of the first projected year that pay less than average.

    With no projection or no income at all, every month counts as low.
    """

    if not projection:
        return LowMonthsAnalysis(ALL_MONTHS, 0.0)

    first_year = projection[min(projection)]
    monthly_totals = [
        month.total_by_currency.get(REPORTING_CURRENCY, 0.0) for month in first_year.months
    ]
    year_total = sum(monthly_totals)
    if year_total == 0:
        return LowMonthsAnalysis(ALL_MONTHS, 0.0)

    average = year_total / 12
    low_months = tuple(
        index + 1 for index, total in enumerate(monthly_totals) if total < average
    )
    return LowMonthsAnalysis(low_months, average)


def suggest_stocks(
    low_months: Sequence[int],
    existing_tickers: Iterable[str],
    max_results: int = 5,
    catalog: Optional[Sequence[SuggestedStock]] = None,
    rng: Optional[random.Random] = None,
) -> List[SuggestedStock]:
    """Suggest catalog stocks that pay in the given low months.

    Stocks already held are skipped. Candidates covering more low months come
    first; ties are shuffled so repeated calls vary.
    """

    if not low_months:
        return []

    stocks = catalog if catalog is not None else DIVIDEND_STOCKS
    shuffler = rng or random.Random()
    wanted = set(low_months)
    held = {ticker.upper() for ticker in existing_tickers}

    groups: Dict[int, List[SuggestedStock]] = {}
    for stock in stocks:
        if stock.ticker.upper() in held:
            continue
        covered = tuple(month for month in stock.typical_months if month in wanted)
        if not covered:
            continue
        candidate = SuggestedStock(
            ticker=stock.ticker,
            name=stock.name,
            typical_months=stock.typical_months,
            sector=stock.sector,
            covered_months=covered,
        )
        groups.setdefault(len(covered), []).append(candidate)

    ordered: List[SuggestedStock] = []
    for coverage in sorted(groups, reverse=True):
        group = groups[coverage]
        shuffler.shuffle(group)
        ordered.extend(group)
    return ordered[:max_results]


def random_example_holdings(
    min_count: int,
    max_count: int,
    exclude: Iterable[str] = (),
    rng: Optional[random.Random] = None,
    pool: Optional[Sequence[ExampleStock]] = None,
) -> List[Holding]:
    """Pick between ``min_count`` and ``max_count`` random example holdings.

    Tickers in ``exclude`` are skipped regardless of case and the count is
    capped at what is left of the pool. Each holding gets 10 to 50 shares.
    """

    stocks = pool if pool is not None else EXAMPLE_STOCKS
    picker = rng or random.Random()
    excluded = {ticker.upper() for ticker in exclude}
    available = [stock for stock in stocks if stock.ticker.upper() not in excluded]
    if not available:
        return []

    count = min(len(available), picker.randint(min_count, max_count))
    low, high = EXAMPLE_SHARES_RANGE
    return [
        Holding(
            ticker=stock.ticker,
            name=stock.name,
            shares=float(picker.randint(low, high)),
            currency=stock.currency,
        )
        for stock in picker.sample(available, count)
    ]


def calculate_portfolio_value(
    stocks: Sequence[StockPosition],
    normalizer: Optional[CurrencyNormalizer] = None,
) -> PortfolioValue:
    """Current value of each holding in USD, largest first."""

    if not stocks:
        return PortfolioValue(total_usd=0.0)

    fx = normalizer or CurrencyNormalizer()
    values = [
        StockValue(
            ticker=stock.ticker,
            name=stock.name,
            shares=stock.initial_shares,
            price_usd=fx.convert(stock.current_price, stock.currency),
            value_usd=fx.convert(stock.initial_shares * stock.current_price, stock.currency),
        )
        for stock in stocks
    ]
    total = sum(value.value_usd for value in values)
    if total > 0:
        for value in values:
            value.percent = value.value_usd / total * 100

    values.sort(key=lambda value: value.value_usd, reverse=True)
    return PortfolioValue(total_usd=total, stocks=values)


def calculate_year_end_value(
    stocks: Sequence[StockPosition],
    end_of_year_shares: Mapping[str, float],
    normalizer: Optional[CurrencyNormalizer] = None,
) -> float:
    """USD value of the end-of-year share counts at today's prices."""

    fx = normalizer or CurrencyNormalizer()
    total = 0.0
    for stock in stocks:
        shares = end_of_year_shares.get(stock.ticker, stock.initial_shares)
        total += fx.convert(shares * stock.current_price, stock.currency)
    return total
