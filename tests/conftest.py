import pytest

from dividends.models import DividendScheduleEntry, StockPosition


@pytest.fixture
def make_stock():
    def _make(
        ticker="TEST",
        shares=100,
        price=50.0,
        schedule=((6, 15, 2.0),),
        currency="USD",
        name=None,
        has_dividends=True,
    ):
        return StockPosition(
            ticker=ticker,
            name=name or f"{ticker} Company",
            initial_shares=shares,
            currency=currency,
            current_price=price,
            dividend_schedule=tuple(
                DividendScheduleEntry(month=m, day=d, amount=a) for m, d, a in schedule
            ),
            has_dividends=has_dividends,
        )

    return _make
