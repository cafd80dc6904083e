"""Static configuration: exchange rates, scenarios and the suggestion catalog."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Tuple

from .models import ExampleStock, Scenario, SuggestedStock

LOGGER = logging.getLogger(__name__)

REPORTING_CURRENCY = "USD"
PROJECTION_YEARS = 3
DEFAULT_CACHE_TTL_SECONDS = 24 * 60 * 60
DEFAULT_FETCH_WORKERS = 8

# Approximate rates to USD, early 2026.
EXCHANGE_RATES_TO_USD = {
    "USD": 1.0,
    "SEK": 0.095,
    "EUR": 1.08,
    "GBP": 1.27,
    "CHF": 1.12,
    "NOK": 0.091,
    "DKK": 0.145,
    "CAD": 0.74,
    "AUD": 0.65,
    "JPY": 0.0067,
}

FLAT = Scenario("flat", "Flat prices", 0.0)
BULLISH = Scenario("bullish", "Bullish (+10%/yr)", 0.10)
BEARISH = Scenario("bearish", "Bearish (-10%/yr)", -0.10)

DEFAULT_SCENARIOS = (FLAT, BULLISH, BEARISH)

_QUARTER_MAR = (3, 6, 9, 12)
_QUARTER_FEB = (2, 5, 8, 11)
_QUARTER_JAN = (1, 4, 7, 10)
_MONTHLY = tuple(range(1, 13))

DIVIDEND_STOCKS: Tuple[SuggestedStock, ...] = (
    # Dividend aristocrats
    SuggestedStock("JNJ", "Johnson & Johnson", _QUARTER_MAR, "Healthcare"),
    SuggestedStock("PG", "Procter & Gamble", _QUARTER_FEB, "Consumer Staples"),
    SuggestedStock("KO", "Coca-Cola", (4, 7, 10, 1), "Consumer Staples"),
    SuggestedStock("PEP", "PepsiCo", (1, 3, 6, 9), "Consumer Staples"),
    SuggestedStock("MMM", "3M Company", _QUARTER_MAR, "Industrials"),
    SuggestedStock("ABT", "Abbott Laboratories", _QUARTER_FEB, "Healthcare"),
    SuggestedStock("ABBV", "AbbVie", _QUARTER_FEB, "Healthcare"),
    SuggestedStock("CL", "Colgate-Palmolive", _QUARTER_FEB, "Consumer Staples"),
    SuggestedStock("KMB", "Kimberly-Clark", _QUARTER_JAN, "Consumer Staples"),
    SuggestedStock("MCD", "McDonald's", _QUARTER_MAR, "Consumer Discretionary"),
    SuggestedStock("WMT", "Walmart", (1, 4, 6, 9), "Consumer Staples"),
    SuggestedStock("HD", "Home Depot", _QUARTER_MAR, "Consumer Discretionary"),
    SuggestedStock("SYY", "Sysco", _QUARTER_JAN, "Consumer Staples"),
    SuggestedStock("CAT", "Caterpillar", _QUARTER_FEB, "Industrials"),
    # Technology
    SuggestedStock("AAPL", "Apple", _QUARTER_FEB, "Technology"),
    SuggestedStock("MSFT", "Microsoft", _QUARTER_MAR, "Technology"),
    SuggestedStock("CSCO", "Cisco Systems", _QUARTER_JAN, "Technology"),
    SuggestedStock("IBM", "IBM", _QUARTER_MAR, "Technology"),
    SuggestedStock("TXN", "Texas Instruments", _QUARTER_FEB, "Technology"),
    SuggestedStock("AVGO", "Broadcom", _QUARTER_MAR, "Technology"),
    # Financials
    SuggestedStock("JPM", "JPMorgan Chase", _QUARTER_JAN, "Financials"),
    SuggestedStock("BAC", "Bank of America", _QUARTER_MAR, "Financials"),
    SuggestedStock("MS", "Morgan Stanley", _QUARTER_FEB, "Financials"),
    SuggestedStock("BLK", "BlackRock", _QUARTER_MAR, "Financials"),
    SuggestedStock("USB", "U.S. Bancorp", _QUARTER_JAN, "Financials"),
    # Utilities
    SuggestedStock("NEE", "NextEra Energy", _QUARTER_MAR, "Utilities"),
    SuggestedStock("DUK", "Duke Energy", _QUARTER_MAR, "Utilities"),
    SuggestedStock("SO", "Southern Company", _QUARTER_MAR, "Utilities"),
    SuggestedStock("XEL", "Xcel Energy", _QUARTER_JAN, "Utilities"),
    SuggestedStock("ED", "Consolidated Edison", _QUARTER_MAR, "Utilities"),
    # Healthcare
    SuggestedStock("PFE", "Pfizer", _QUARTER_MAR, "Healthcare"),
    SuggestedStock("MRK", "Merck", _QUARTER_JAN, "Healthcare"),
    SuggestedStock("BMY", "Bristol-Myers Squibb", _QUARTER_FEB, "Healthcare"),
    SuggestedStock("CVS", "CVS Health", _QUARTER_FEB, "Healthcare"),
    SuggestedStock("MDT", "Medtronic", _QUARTER_JAN, "Healthcare"),
    # Energy
    SuggestedStock("XOM", "Exxon Mobil", _QUARTER_MAR, "Energy"),
    SuggestedStock("CVX", "Chevron", _QUARTER_MAR, "Energy"),
    SuggestedStock("EOG", "EOG Resources", _QUARTER_JAN, "Energy"),
    SuggestedStock("SLB", "Schlumberger", _QUARTER_JAN, "Energy"),
    # REITs
    SuggestedStock("O", "Realty Income", _MONTHLY, "REIT"),
    SuggestedStock("STAG", "STAG Industrial", _MONTHLY, "REIT"),
    SuggestedStock("MAIN", "Main Street Capital", _MONTHLY, "REIT"),
    SuggestedStock("AMT", "American Tower", _QUARTER_JAN, "REIT"),
    SuggestedStock("WELL", "Welltower", _QUARTER_FEB, "REIT"),
    SuggestedStock("AVB", "AvalonBay Communities", _QUARTER_JAN, "REIT"),
    # Industrials
    SuggestedStock("UNP", "Union Pacific", _QUARTER_MAR, "Industrials"),
    SuggestedStock("GD", "General Dynamics", _QUARTER_FEB, "Industrials"),
    SuggestedStock("ITW", "Illinois Tool Works", _QUARTER_JAN, "Industrials"),
    # Communication services
    SuggestedStock("VZ", "Verizon", _QUARTER_FEB, "Communication Services"),
    SuggestedStock("T", "AT&T", _QUARTER_FEB, "Communication Services"),
    SuggestedStock("CMCSA", "Comcast", _QUARTER_JAN, "Communication Services"),
)

EXAMPLE_SHARES_RANGE = (10, 50)

EXAMPLE_STOCKS: Tuple[ExampleStock, ...] = (
    # United States
    ExampleStock("AAPL", "Apple Inc", "USD"),
    ExampleStock("MSFT", "Microsoft Corporation", "USD"),
    ExampleStock("GOOGL", "Alphabet Inc", "USD"),
    ExampleStock("AMZN", "Amazon.com Inc", "USD"),
    ExampleStock("META", "Meta Platforms Inc", "USD"),
    ExampleStock("NVDA", "NVIDIA Corporation", "USD"),
    ExampleStock("TSLA", "Tesla Inc", "USD"),
    ExampleStock("NFLX", "Netflix Inc", "USD"),
    ExampleStock("CRM", "Salesforce Inc", "USD"),
    ExampleStock("ORCL", "Oracle Corporation", "USD"),
    ExampleStock("KO", "Coca-Cola Company", "USD"),
    ExampleStock("PEP", "PepsiCo Inc", "USD"),
    ExampleStock("MCD", "McDonald's Corporation", "USD"),
    ExampleStock("WMT", "Walmart Inc", "USD"),
    ExampleStock("HD", "Home Depot Inc", "USD"),
    ExampleStock("NKE", "Nike Inc", "USD"),
    ExampleStock("SBUX", "Starbucks Corporation", "USD"),
    ExampleStock("DIS", "Walt Disney Company", "USD"),
    ExampleStock("JNJ", "Johnson & Johnson", "USD"),
    ExampleStock("PFE", "Pfizer Inc", "USD"),
    ExampleStock("UNH", "UnitedHealth Group", "USD"),
    ExampleStock("ABBV", "AbbVie Inc", "USD"),
    ExampleStock("JPM", "JPMorgan Chase & Co", "USD"),
    ExampleStock("V", "Visa Inc", "USD"),
    ExampleStock("MA", "Mastercard Inc", "USD"),
    ExampleStock("BRK-B", "Berkshire Hathaway Inc", "USD"),
    ExampleStock("XOM", "Exxon Mobil Corporation", "USD"),
    ExampleStock("CVX", "Chevron Corporation", "USD"),
    # Switzerland
    ExampleStock("NESN.SW", "Nestlé SA", "CHF"),
    ExampleStock("NOVN.SW", "Novartis AG", "CHF"),
    ExampleStock("ROG.SW", "Roche Holding AG", "CHF"),
    # Sweden
    ExampleStock("VOLV-B.ST", "Volvo B", "SEK"),
    ExampleStock("ERIC-B.ST", "Ericsson B", "SEK"),
    ExampleStock("HM-B.ST", "H&M B", "SEK"),
    ExampleStock("INVE-B.ST", "Investor B", "SEK"),
    ExampleStock("SEB-A.ST", "SEB A", "SEK"),
    # United Kingdom
    ExampleStock("SHEL.L", "Shell plc", "GBP"),
    ExampleStock("AZN.L", "AstraZeneca plc", "GBP"),
    ExampleStock("HSBA.L", "HSBC Holdings plc", "GBP"),
    ExampleStock("BP.L", "BP plc", "GBP"),
    ExampleStock("ULVR.L", "Unilever plc", "GBP"),
    # Germany and France
    ExampleStock("SAP.DE", "SAP SE", "EUR"),
    ExampleStock("SIE.DE", "Siemens AG", "EUR"),
    ExampleStock("BMW.DE", "BMW AG", "EUR"),
    ExampleStock("VOW3.DE", "Volkswagen AG", "EUR"),
    ExampleStock("MC.PA", "LVMH", "EUR"),
    ExampleStock("OR.PA", "L'Oréal SA", "EUR"),
    ExampleStock("TTE.PA", "TotalEnergies SE", "EUR"),
    # Japan
    ExampleStock("7203.T", "Toyota Motor Corporation", "JPY"),
    ExampleStock("6758.T", "Sony Group Corporation", "JPY"),
    ExampleStock("9984.T", "SoftBank Group Corp", "JPY"),
    ExampleStock("6861.T", "Keyence Corporation", "JPY"),
    # Hong Kong
    ExampleStock("0700.HK", "Tencent Holdings Ltd", "HKD"),
    ExampleStock("9988.HK", "Alibaba Group Holding Ltd", "HKD"),
    ExampleStock("1299.HK", "AIA Group Ltd", "HKD"),
    # Australia
    ExampleStock("BHP.AX", "BHP Group Ltd", "AUD"),
    ExampleStock("CBA.AX", "Commonwealth Bank of Australia", "AUD"),
    ExampleStock("CSL.AX", "CSL Ltd", "AUD"),
    # South Korea and India
    ExampleStock("005930.KS", "Samsung Electronics Co Ltd", "KRW"),
    ExampleStock("000660.KS", "SK Hynix Inc", "KRW"),
    ExampleStock("RELIANCE.NS", "Reliance Industries Ltd", "INR"),
    ExampleStock("TCS.NS", "Tata Consultancy Services Ltd", "INR"),
    ExampleStock("INFY.NS", "Infosys Ltd", "INR"),
)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        LOGGER.warning("Ignoring invalid %s=%r; using %s", name, raw, default)
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        LOGGER.warning("Ignoring invalid %s=%r; using %s", name, raw, default)
        return default
    if value <= 0:
        LOGGER.warning("Ignoring non-positive %s=%r; using %s", name, raw, default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime overrides read from the environment."""

    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    bullish_rate: float = BULLISH.annual_growth_rate
    bearish_rate: float = BEARISH.annual_growth_rate
    fetch_workers: int = DEFAULT_FETCH_WORKERS

    @classmethod
    def load(cls) -> "Settings":
        return cls(
            cache_ttl_seconds=_env_int("DIVIDENDS_CACHE_TTL", DEFAULT_CACHE_TTL_SECONDS),
            bullish_rate=_env_float("DIVIDENDS_BULLISH_RATE", BULLISH.annual_growth_rate),
            bearish_rate=_env_float("DIVIDENDS_BEARISH_RATE", BEARISH.annual_growth_rate),
            fetch_workers=_env_int("DIVIDENDS_FETCH_WORKERS", DEFAULT_FETCH_WORKERS),
        )

    @property
    def scenarios(self) -> Tuple[Scenario, ...]:
        return (
            FLAT,
            Scenario(
                BULLISH.name,
                f"Bullish ({self.bullish_rate:+.0%}/yr)",
                self.bullish_rate,
            ),
            Scenario(
                BEARISH.name,
                f"Bearish ({self.bearish_rate:+.0%}/yr)",
                self.bearish_rate,
            ),
        )
