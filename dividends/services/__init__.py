"""Service layer: projection core and its collaborators."""
from .frequency import detect_frequency, format_frequency
from .fx import CurrencyNormalizer, convert
from .insight import (
    LowMonthsAnalysis,
    analyze_low_months,
    calculate_portfolio_value,
    calculate_year_end_value,
    random_example_holdings,
    suggest_stocks,
)
from .market_data import BatchResult, DividendDataService, TickerData
from .projection import ReinvestmentSimulator, project, project_scenarios
from .schedule import build_events

__all__ = [
    "BatchResult",
    "CurrencyNormalizer",
    "DividendDataService",
    "LowMonthsAnalysis",
    "ReinvestmentSimulator",
    "TickerData",
    "analyze_low_months",
    "build_events",
    "calculate_portfolio_value",
    "calculate_year_end_value",
    "convert",
    "detect_frequency",
    "format_frequency",
    "project",
    "project_scenarios",
    "random_example_holdings",
    "suggest_stocks",
]
