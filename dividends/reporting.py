"""Tabular views of a projection for display and CSV export."""
from __future__ import annotations

import pandas as pd

from .config import REPORTING_CURRENCY
from .models import ProjectionResult
from .utils import clean_stock_name

PAYMENT_COLUMNS = ["Year", "Month", "Date", "Ticker", "Name", "Shares", "Amount (USD)"]
MONTHLY_COLUMNS = ["Year", "Month", "Payments", "Total (USD)"]
SHARES_COLUMNS = ["Year", "Ticker", "Shares"]


def payments_frame(result: ProjectionResult) -> pd.DataFrame:
    rows = [
        {
            "Year": year,
            "Month": month.month,
            "Date": payment.date,
            "Ticker": payment.ticker,
            "Name": clean_stock_name(payment.name),
            "Shares": payment.shares_at_payment,
            "Amount (USD)": payment.amount,
        }
        for year, projection in sorted(result.items())
        for month in projection.months
        for payment in month.payments
    ]
    return pd.DataFrame(rows, columns=PAYMENT_COLUMNS)


def monthly_totals_frame(result: ProjectionResult) -> pd.DataFrame:
    """One row per projected month, zero where nothing is paid."""

    rows = [
        {
            "Year": year,
            "Month": month.month,
            "Payments": len(month.payments),
            "Total (USD)": month.total_by_currency.get(REPORTING_CURRENCY, 0.0),
        }
        for year, projection in sorted(result.items())
        for month in projection.months
    ]
    return pd.DataFrame(rows, columns=MONTHLY_COLUMNS)


def shares_frame(result: ProjectionResult) -> pd.DataFrame:
    rows = [
        {"Year": year, "Ticker": ticker, "Shares": shares}
        for year, projection in sorted(result.items())
        for ticker, shares in projection.end_of_year_shares.items()
    ]
    return pd.DataFrame(rows, columns=SHARES_COLUMNS)
