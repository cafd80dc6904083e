"""Dividend history, price and name lookups backed by Yahoo Finance."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Sequence

import pandas as pd
import yfinance as yf
from dateutil.relativedelta import relativedelta

from ..cache import CACHE_KEYS, TTLCache
from ..config import DEFAULT_FETCH_WORKERS
from ..messages import ServiceMessage
from ..models import (
    DividendInfo,
    DividendPayment,
    DividendScheduleEntry,
    FrequencyInfo,
    Holding,
    SearchResult,
    StockPosition,
    TickerError,
)
from ..utils import clean_stock_name
from .frequency import detect_frequency

LOGGER = logging.getLogger(__name__)

NO_DIVIDENDS = "No dividend history found in the last 12 months"
NO_PRICE = "Could not fetch current price (needed for DRIP calculations)"


def not_found(ticker: str) -> str:
    return f'Ticker "{ticker}" not found'


def invalid_ticker(ticker: str) -> str:
    return f"Invalid ticker symbol: {ticker}"


@dataclass(frozen=True)
class TickerData:
    """Raw lookup result for one ticker; ``error`` is set on partial failure."""

    ticker: str
    dividends: tuple = ()
    current_price: Optional[float] = None
    name: Optional[str] = None
    error: Optional[str] = None


@dataclass
class BatchResult:
    stocks: List[StockPosition] = field(default_factory=list)
    errors: List[TickerError] = field(default_factory=list)
    frequencies: Dict[str, FrequencyInfo] = field(default_factory=dict)
    messages: List[ServiceMessage] = field(default_factory=list)


def to_schedule(payments: Sequence[DividendPayment]) -> tuple:
    return tuple(
        DividendScheduleEntry(month=p.date.month, day=p.date.day, amount=p.amount)
        for p in payments
    )


class DividendDataService:
    """Fetches trailing-12-month dividends and the latest price per ticker."""

    def __init__(
        self,
        cache: Optional[TTLCache] = None,
        ticker_factory: Callable[[str], object] = yf.Ticker,
        search_factory: Callable[..., object] = yf.Search,
        today: Callable[[], date] = date.today,
        max_workers: int = DEFAULT_FETCH_WORKERS,
    ) -> None:
        self._cache = cache if cache is not None else TTLCache()
        self._ticker_factory = ticker_factory
        self._search_factory = search_factory
        self._today = today
        self._max_workers = max_workers

    def fetch(self, ticker: str) -> TickerData:
        key = f"{CACHE_KEYS.DIVIDEND_DATA}{ticker.upper()}"
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        data = self._download(ticker)
        if data.dividends or data.current_price:
            self._cache.set(key, data)
        return data

    def fetch_batch(self, holdings: Sequence[Holding]) -> BatchResult:
        """Resolve every holding; tickers that cannot be used land in ``errors``."""

        result = BatchResult()
        if not holdings:
            return result

        workers = max(1, min(self._max_workers, len(holdings)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            fetched = list(executor.map(lambda h: self.fetch(h.ticker), holdings))

        for holding, data in zip(holdings, fetched):
            name = holding.name if holding.name and holding.name != holding.ticker else (
                data.name or holding.ticker
            )

            if data.error and not data.dividends and not data.current_price:
                result.errors.append(TickerError(holding.ticker, data.error))
                result.messages.append(ServiceMessage.error(data.error, holding.ticker))
                continue

            if not data.dividends:
                result.stocks.append(
                    StockPosition(
                        ticker=holding.ticker,
                        name=name,
                        initial_shares=holding.shares,
                        currency=holding.currency,
                        current_price=data.current_price or 0.0,
                        dividend_schedule=(),
                        has_dividends=False,
                    )
                )
                result.frequencies[holding.ticker] = detect_frequency(())
                result.messages.append(
                    ServiceMessage.warning(f"{holding.ticker}: {NO_DIVIDENDS}", holding.ticker)
                )
                continue

            if not data.current_price:
                result.errors.append(TickerError(holding.ticker, NO_PRICE))
                result.messages.append(ServiceMessage.error(NO_PRICE, holding.ticker))
                continue

            result.stocks.append(
                StockPosition(
                    ticker=holding.ticker,
                    name=name,
                    initial_shares=holding.shares,
                    currency=holding.currency,
                    current_price=data.current_price,
                    dividend_schedule=to_schedule(data.dividends),
                    has_dividends=True,
                )
            )
            result.frequencies[holding.ticker] = detect_frequency(data.dividends)

        LOGGER.info(
            "Resolved %d of %d tickers (%d errors)",
            len(result.stocks),
            len(holdings),
            len(result.errors),
        )
        return result

    def dividend_info(self, ticker: str) -> DividendInfo:
        """Frequency and price of one ticker, for previewing a search pick."""

        data = self.fetch(ticker)
        if not data.dividends:
            return DividendInfo(
                ticker=ticker,
                has_dividends=False,
                current_price=data.current_price,
                error=data.error,
            )
        return DividendInfo(
            ticker=ticker,
            has_dividends=True,
            frequency=detect_frequency(data.dividends),
            current_price=data.current_price,
        )

    def search(self, query: str, limit: int = 10) -> List[SearchResult]:
        query = query.strip()
        if not query:
            return []

        key = f"{CACHE_KEYS.STOCK_SEARCH}{query.lower()}:{limit}"
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            quotes = self._search_factory(query, max_results=limit).quotes
        except Exception as exc:  # noqa: BLE001 - search failures degrade to no results
            LOGGER.warning("Ticker search for %r failed: %s", query, exc)
            return []

        results = [
            SearchResult(
                ticker=quote["symbol"],
                name=clean_stock_name(
                    quote.get("shortname") or quote.get("longname") or quote["symbol"]
                ),
                exchange=quote.get("exchange"),
                quote_type=quote.get("quoteType"),
            )
            for quote in quotes
            if quote.get("symbol")
        ]
        self._cache.set(key, results)
        return results

    def _download(self, ticker: str) -> TickerData:
        end = self._today()
        start = end - relativedelta(years=1)
        try:
            handle = self._ticker_factory(ticker)
            hist = handle.history(
                start=start.isoformat(),
                end=(end + timedelta(days=1)).isoformat(),
                actions=True,
            )
        except Exception as exc:  # noqa: BLE001 - reported per ticker
            LOGGER.warning("Failed to fetch history for %s: %s", ticker, exc)
            return TickerData(ticker, error=self._describe_failure(ticker, exc))

        if hist is None or hist.empty:
            return TickerData(ticker, error=not_found(ticker))

        current_price = None
        if "Close" in hist:
            closes = hist["Close"].dropna()
            if not closes.empty:
                current_price = float(closes.iloc[-1])

        payments: tuple = ()
        if "Dividends" in hist:
            payments = self._extract_dividends(hist["Dividends"])

        name = self._lookup_name(handle, ticker)
        return TickerData(
            ticker=ticker,
            dividends=payments,
            current_price=current_price,
            name=name,
            error=None if payments else NO_DIVIDENDS,
        )

    @staticmethod
    def _describe_failure(ticker: str, exc: Exception) -> str:
        message = str(exc)
        if "Not Found" in message:
            return not_found(ticker)
        if "Invalid" in message:
            return invalid_ticker(ticker)
        return f"Failed to fetch dividends: {message}"

    @staticmethod
    def _extract_dividends(series: pd.Series) -> tuple:
        series = series.astype(float)
        series = series[series > 0]
        if series.empty:
            return ()
        if getattr(series.index, "tz", None) is not None:
            series.index = series.index.tz_localize(None)
        series = series.sort_index()
        return tuple(
            DividendPayment(date=timestamp.date(), amount=float(amount))
            for timestamp, amount in series.items()
        )

    @staticmethod
    def _lookup_name(handle, ticker: str) -> Optional[str]:
        try:
            info = handle.info or {}
        except Exception as exc:  # noqa: BLE001 - the name is cosmetic
            LOGGER.debug("No quote info for %s: %s", ticker, exc)
            return None
        return info.get("shortName") or info.get("longName")
