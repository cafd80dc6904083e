"""Dividend income forecasting package."""

from .cache import CACHE_KEYS, TTLCache
from .config import (
    DEFAULT_SCENARIOS,
    DIVIDEND_STOCKS,
    EXAMPLE_STOCKS,
    EXCHANGE_RATES_TO_USD,
    Settings,
)
from .messages import MessageLevel, ServiceMessage
from .models import (
    DividendEvent,
    DividendInfo,
    DividendPayment,
    DividendScheduleEntry,
    ExampleStock,
    Holding,
    MonthProjection,
    PortfolioValue,
    ProjectedPayment,
    ProjectionResult,
    Scenario,
    SimulationState,
    StockPosition,
    SuggestedStock,
    TickerError,
    YearProjection,
)
from .repositories import HoldingsRepository, ParsedPortfolio
from .services import (
    CurrencyNormalizer,
    DividendDataService,
    analyze_low_months,
    calculate_portfolio_value,
    calculate_year_end_value,
    convert,
    project,
    project_scenarios,
    random_example_holdings,
    suggest_stocks,
)

__all__ = [
    "CACHE_KEYS",
    "CurrencyNormalizer",
    "DEFAULT_SCENARIOS",
    "DIVIDEND_STOCKS",
    "DividendDataService",
    "DividendEvent",
    "DividendInfo",
    "DividendPayment",
    "DividendScheduleEntry",
    "EXAMPLE_STOCKS",
    "EXCHANGE_RATES_TO_USD",
    "ExampleStock",
    "Holding",
    "HoldingsRepository",
    "MessageLevel",
    "MonthProjection",
    "ParsedPortfolio",
    "PortfolioValue",
    "ProjectedPayment",
    "ProjectionResult",
    "Scenario",
    "ServiceMessage",
    "Settings",
    "SimulationState",
    "StockPosition",
    "SuggestedStock",
    "TTLCache",
    "TickerError",
    "YearProjection",
    "analyze_low_months",
    "calculate_portfolio_value",
    "calculate_year_end_value",
    "convert",
    "project",
    "project_scenarios",
    "random_example_holdings",
    "suggest_stocks",
]
