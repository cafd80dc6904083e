"""Domain models for the dividend income forecaster."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class DividendScheduleEntry:
    """One payment of a stock's historical 12-month dividend cycle."""

    month: int
    day: int
    amount: float


@dataclass(frozen=True)
class StockPosition:
    """A holding with the market data needed to project its dividends."""

    ticker: str
    name: str
    initial_shares: float
    currency: str
    current_price: float
    dividend_schedule: Tuple[DividendScheduleEntry, ...] = ()
    has_dividends: bool = True


@dataclass(frozen=True)
class Holding:
    """A row of a brokerage export, before any market data is attached."""

    ticker: str
    name: str
    shares: float
    currency: str = "SEK"
    isin: str = ""
    type: str = "UNKNOWN"


@dataclass(frozen=True)
class DividendPayment:
    """Historical dividend paid on ``date``, per share."""

    date: date
    amount: float


@dataclass(frozen=True)
class DividendEvent:
    stock: StockPosition
    month: int
    day: int
    amount: float


@dataclass
class SimulationState:
    """Share counts and uninvested cash carried across projection years."""

    shares_by_ticker: Dict[str, float] = field(default_factory=dict)
    unspent_cash_by_ticker: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_stocks(cls, stocks: Iterable[StockPosition]) -> "SimulationState":
        state = cls()
        for stock in stocks:
            state.shares_by_ticker[stock.ticker] = stock.initial_shares
            state.unspent_cash_by_ticker[stock.ticker] = 0.0
        return state


@dataclass(frozen=True)
class ProjectedPayment:
    ticker: str
    name: str
    amount: float
    currency: str
    date: str
    shares_at_payment: float


@dataclass(frozen=True)
class ReinvestmentRecord:
    """Records the share purchase that followed one dividend payment."""

    ticker: str
    date: str
    cash_available: float
    unit_price: float
    shares_bought: int
    cash_after: float
    shares_after: float


@dataclass
class MonthProjection:
    month: int
    total_by_currency: Dict[str, float] = field(default_factory=dict)
    payments: List[ProjectedPayment] = field(default_factory=list)


@dataclass
class YearProjection:
    months: List[MonthProjection]
    year_total_by_currency: Dict[str, float] = field(default_factory=dict)
    end_of_year_shares: Dict[str, float] = field(default_factory=dict)
    reinvestments: List[ReinvestmentRecord] = field(default_factory=list)


ProjectionResult = Dict[int, YearProjection]


@dataclass(frozen=True)
class Scenario:
    """A named assumption about yearly share price growth."""

    name: str
    label: str
    annual_growth_rate: float = 0.0


@dataclass(frozen=True)
class TickerError:
    ticker: str
    error: str


@dataclass(frozen=True)
class SuggestedStock:
    """Catalog entry of a dividend payer and the months it usually pays in."""

    ticker: str
    name: str
    typical_months: Tuple[int, ...]
    sector: str
    covered_months: Tuple[int, ...] = ()


@dataclass(frozen=True)
class ExampleStock:
    """Well-known stock used to seed a random example portfolio."""

    ticker: str
    name: str
    currency: str


@dataclass(frozen=True)
class FrequencyInfo:
    frequency: str
    months: Tuple[int, ...] = ()


@dataclass(frozen=True)
class SearchResult:
    ticker: str
    name: str
    exchange: Optional[str] = None
    quote_type: Optional[str] = None


@dataclass(frozen=True)
class DividendInfo:
    """Summary of one ticker's dividend profile, shown before adding it."""

    ticker: str
    has_dividends: bool
    frequency: Optional[FrequencyInfo] = None
    current_price: Optional[float] = None
    error: Optional[str] = None


@dataclass
class StockValue:
    ticker: str
    name: str
    shares: float
    price_usd: float
    value_usd: float
    percent: float = 0.0


@dataclass
class PortfolioValue:
    """Current market value of the portfolio in the reporting currency."""

    total_usd: float
    stocks: List[StockValue] = field(default_factory=list)

    @property
    def largest(self) -> Optional[StockValue]:
        if not self.stocks:
            return None
        return self.stocks[0]
