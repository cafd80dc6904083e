from datetime import date

import pandas as pd
import pytest

from dividends.cache import TTLCache
from dividends.messages import MessageLevel
from dividends.models import DividendScheduleEntry, Holding
from dividends.services.market_data import (
    NO_DIVIDENDS,
    NO_PRICE,
    DividendDataService,
    invalid_ticker,
    not_found,
)

TODAY = date(2026, 1, 20)


def history(rows):
    index = pd.DatetimeIndex([r[0] for r in rows]).tz_localize("America/New_York")
    return pd.DataFrame(
        {
            "Close": [r[1] for r in rows],
            "Dividends": [r[2] for r in rows],
        },
        index=index,
    )


HISTORIES = {
    "KO": history(
        [
            ("2025-03-14", 60.0, 0.51),
            ("2025-06-13", 61.0, 0.51),
            ("2025-07-01", 62.5, 0.0),
            ("2025-09-12", 62.0, 0.51),
            ("2025-12-12", 63.0, 0.52),
            ("2026-01-16", 64.25, 0.0),
        ]
    ),
    "TSLA": history([("2025-12-31", 400.0, 0.0), ("2026-01-16", 410.0, 0.0)]),
    "NOPRICE": history([("2025-05-02", float("nan"), 1.25)]),
    "ZERO": history([("2026-01-16", 0.0, 0.0)]),
    "EMPTY": pd.DataFrame(),
}

FAILURES = {
    "BROKEN": RuntimeError("HTTP 500"),
    "GONE": RuntimeError("HTTP Error 404: Not Found"),
    "B@D": ValueError("Invalid ticker format"),
}


class FakeTicker:
    calls = []

    def __init__(self, symbol):
        self.symbol = symbol
        FakeTicker.calls.append(symbol)

    def history(self, start, end, actions):
        assert actions is True
        if self.symbol in FAILURES:
            raise FAILURES[self.symbol]
        return HISTORIES[self.symbol].copy()

    @property
    def info(self):
        if self.symbol == "KO":
            return {"shortName": "Coca-Cola Company"}
        raise KeyError("no info")


class FakeSearch:
    def __init__(self, query, max_results):
        self.quotes = [
            {"symbol": "KO", "shortname": "Coca-Cola Company", "exchange": "NYQ", "quoteType": "EQUITY"},
            {"symbol": "KOF", "longname": "Coca-Cola FEMSA SAB de CV", "exchange": "NYQ"},
            {"shortname": "missing symbol"},
        ][:max_results]


@pytest.fixture
def service():
    FakeTicker.calls = []
    return DividendDataService(
        cache=TTLCache(),
        ticker_factory=FakeTicker,
        search_factory=FakeSearch,
        today=lambda: TODAY,
        max_workers=2,
    )


class TestFetch:
    def test_dividends_price_and_name(self, service):
        data = service.fetch("KO")

        assert data.error is None
        assert data.current_price == 64.25
        assert data.name == "Coca-Cola Company"
        assert [(p.date, p.amount) for p in data.dividends] == [
            (date(2025, 3, 14), 0.51),
            (date(2025, 6, 13), 0.51),
            (date(2025, 9, 12), 0.51),
            (date(2025, 12, 12), 0.52),
        ]

    def test_price_without_dividends(self, service):
        data = service.fetch("TSLA")

        assert data.dividends == ()
        assert data.current_price == 410.0
        assert data.name is None
        assert data.error == NO_DIVIDENDS

    def test_unknown_ticker(self, service):
        data = service.fetch("EMPTY")

        assert data.current_price is None
        assert "not found" in data.error

    def test_download_failure_is_reported(self, service):
        data = service.fetch("BROKEN")

        assert data.dividends == ()
        assert data.error == "Failed to fetch dividends: HTTP 500"

    @pytest.mark.parametrize(
        "ticker, expected",
        [
            ("GONE", not_found("GONE")),
            ("B@D", invalid_ticker("B@D")),
        ],
    )
    def test_yahoo_errors_are_translated(self, service, ticker, expected):
        data = service.fetch(ticker)

        assert data.dividends == ()
        assert data.error == expected

    def test_invalid_ticker_message(self):
        assert invalid_ticker("B@D") == "Invalid ticker symbol: B@D"
        assert not_found("XYZ") == 'Ticker "XYZ" not found'

    def test_results_are_cached(self, service):
        service.fetch("KO")
        service.fetch("ko")

        assert FakeTicker.calls == ["KO"]

    def test_failures_are_not_cached(self, service):
        service.fetch("BROKEN")
        service.fetch("BROKEN")

        assert FakeTicker.calls == ["BROKEN", "BROKEN"]


class TestFetchBatch:
    def test_classifies_each_ticker(self, service):
        holdings = [
            Holding("BROKEN", "Broken Corp", 5),
            Holding("KO", "KO", 100, currency="USD"),
            Holding("TSLA", "Tesla Inc", 10, currency="USD"),
            Holding("NOPRICE", "No Price AB", 20),
            Holding("EMPTY", "Gone", 1),
        ]

        result = service.fetch_batch(holdings)

        assert [s.ticker for s in result.stocks] == ["KO", "TSLA"]
        assert [e.ticker for e in result.errors] == ["BROKEN", "NOPRICE", "EMPTY"]
        assert result.errors[1].error == NO_PRICE

        ko, tsla = result.stocks
        assert ko.name == "Coca-Cola Company"
        assert ko.initial_shares == 100
        assert ko.current_price == 64.25
        assert ko.has_dividends is True
        assert ko.dividend_schedule[0] == DividendScheduleEntry(month=3, day=14, amount=0.51)
        assert len(ko.dividend_schedule) == 4

        assert tsla.name == "Tesla Inc"
        assert tsla.has_dividends is False
        assert tsla.dividend_schedule == ()
        assert tsla.current_price == 410.0

        assert result.frequencies["KO"].frequency == "quarterly"
        assert result.frequencies["TSLA"].frequency == "irregular"

        levels = {m.ticker: m.level for m in result.messages}
        assert levels["TSLA"] == MessageLevel.WARNING
        assert levels["BROKEN"] == MessageLevel.ERROR

    def test_zero_price_without_dividends_is_an_error(self, service):
        result = service.fetch_batch([Holding("ZERO", "Zero Corp", 10, currency="USD")])

        assert result.stocks == []
        assert [(e.ticker, e.error) for e in result.errors] == [("ZERO", NO_DIVIDENDS)]
        assert result.messages[0].level == MessageLevel.ERROR

    def test_empty_batch(self, service):
        result = service.fetch_batch([])

        assert result.stocks == []
        assert result.errors == []


class TestDividendInfo:
    def test_payer(self, service):
        info = service.dividend_info("KO")

        assert info.has_dividends is True
        assert info.frequency.frequency == "quarterly"
        assert info.frequency.months == (3, 6, 9, 12)
        assert info.current_price == 64.25
        assert info.error is None

    def test_non_payer_keeps_price(self, service):
        info = service.dividend_info("TSLA")

        assert info.has_dividends is False
        assert info.frequency is None
        assert info.current_price == 410.0
        assert info.error == NO_DIVIDENDS

    def test_unknown_ticker(self, service):
        info = service.dividend_info("EMPTY")

        assert info.has_dividends is False
        assert info.current_price is None
        assert info.error == not_found("EMPTY")


class TestSearch:
    def test_maps_quotes(self, service):
        results = service.search("coca")

        assert [r.ticker for r in results] == ["KO", "KOF"]
        assert results[0].name == "Coca-Cola"
        assert results[0].quote_type == "EQUITY"
        assert results[1].exchange == "NYQ"

    def test_blank_query(self, service):
        assert service.search("   ") == []

    def test_failure_returns_nothing(self):
        def failing(query, max_results):
            raise ConnectionError("offline")

        service = DividendDataService(cache=TTLCache(), search_factory=failing)

        assert service.search("ko") == []
