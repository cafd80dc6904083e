import pytest

from dividends.config import EXCHANGE_RATES_TO_USD
from dividends.messages import MessageLevel
from dividends.services.fx import CurrencyNormalizer, convert
from dividends.services.schedule import build_events


class TestCurrencyNormalizer:
    def test_reporting_currency_is_unchanged(self):
        assert convert(123.45, "USD") == 123.45

    @pytest.mark.parametrize("currency", sorted(EXCHANGE_RATES_TO_USD))
    def test_uses_static_rate_table(self, currency):
        assert convert(10, currency) == pytest.approx(10 * EXCHANGE_RATES_TO_USD[currency])

    def test_known_rates(self):
        assert convert(100, "SEK") == pytest.approx(9.5)
        assert convert(100, "EUR") == pytest.approx(108.0)
        assert convert(1000, "JPY") == pytest.approx(6.7)

    def test_unknown_currency_falls_back_to_parity(self):
        assert convert(42.0, "XYZ") == 42.0
        assert convert(42.0, "") == 42.0

    def test_injected_rates(self):
        normalizer = CurrencyNormalizer({"USD": 1.0, "SEK": 0.1})

        assert normalizer.convert(50, "SEK") == pytest.approx(5.0)
        assert normalizer.convert(50, "EUR") == 50
        assert normalizer.rate_for("EUR") == 1.0
        assert normalizer.reporting_currency == "USD"

    def test_unknown_currencies_are_reported_once(self):
        messages = CurrencyNormalizer().unknown_currencies(["USD", "XYZ", "SEK", "XYZ", "ABC"])

        assert [m.level for m in messages] == [MessageLevel.WARNING, MessageLevel.WARNING]
        assert "ABC" in messages[0].text
        assert "XYZ" in messages[1].text

    def test_no_messages_for_known_currencies(self):
        assert CurrencyNormalizer().unknown_currencies(["USD", "EUR"]) == []


class TestBuildEvents:
    def test_events_sorted_by_month_then_day(self, make_stock):
        late = make_stock("LATE", schedule=((12, 1, 1.0), (2, 20, 1.0)))
        early = make_stock("EARLY", schedule=((2, 3, 1.0), (7, 9, 1.0)))

        events = build_events([late, early], 2026)

        assert [(e.stock.ticker, e.month, e.day) for e in events] == [
            ("EARLY", 2, 3),
            ("LATE", 2, 20),
            ("EARLY", 7, 9),
            ("LATE", 12, 1),
        ]

    def test_same_day_keeps_stock_order(self, make_stock):
        stocks = [
            make_stock("C", schedule=((3, 15, 0.1),)),
            make_stock("A", schedule=((3, 15, 0.2),)),
            make_stock("B", schedule=((3, 15, 0.3),)),
        ]

        events = build_events(stocks, 2026)

        assert [e.stock.ticker for e in events] == ["C", "A", "B"]

    def test_same_ticker_same_day_keeps_schedule_order(self, make_stock):
        stock = make_stock(schedule=((6, 1, 0.5), (6, 1, 0.7)))

        events = build_events([stock], 2026)

        assert [e.amount for e in events] == [0.5, 0.7]

    def test_skips_stocks_without_dividends(self, make_stock):
        stocks = [
            make_stock("NONE", schedule=(), has_dividends=False),
            make_stock("FLAG", has_dividends=False),
            make_stock("EMPTY", schedule=()),
            make_stock("PAY"),
        ]

        events = build_events(stocks, 2026)

        assert [e.stock.ticker for e in events] == ["PAY"]

    def test_schedule_repeats_every_year(self, make_stock):
        stock = make_stock(schedule=((1, 31, 0.25), (7, 31, 0.3)))

        assert build_events([stock], 2026) == build_events([stock], 2028)

    def test_empty_input(self):
        assert build_events([], 2026) == []
