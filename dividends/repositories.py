"""Loading holdings from brokerage CSV exports."""
from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import pandas as pd

from .messages import ServiceMessage
from .models import Holding

LOGGER = logging.getLogger(__name__)

TICKER_COLUMN = "Kortnamn"
NAME_COLUMN = "Namn"
SHARES_COLUMN = "Volym"
CURRENCY_COLUMN = "Valuta"
ISIN_COLUMN = "ISIN"
TYPE_COLUMN = "Typ"


@dataclass
class ParsedPortfolio:
    holdings: List[Holding] = field(default_factory=list)
    messages: List[ServiceMessage] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [message.text for message in self.messages]


def parse_swedish_decimal(value: str) -> float:
    """Parse a number written with a decimal comma, e.g. ``"12,5"``."""
    return float(value.replace(",", "."))


class HoldingsRepository:
    """Reads Avanza portfolio exports (semicolon separated, decimal comma)."""

    def __init__(self, base_path: Path | None = None) -> None:
        self._base_path = base_path or Path.cwd()

    def load(self, filename: str) -> ParsedPortfolio:
        csv_path = self._base_path / filename
        if not csv_path.exists():
            return ParsedPortfolio(messages=[ServiceMessage.error(f"File not found: {filename}")])
        return self.parse(csv_path.read_text(encoding="utf-8-sig"))

    def parse(self, csv_content: str) -> ParsedPortfolio:
        result = ParsedPortfolio()
        try:
            df = pd.read_csv(
                io.StringIO(csv_content),
                sep=";",
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            result.messages.append(ServiceMessage.error(f"CSV parsing errors: {exc}"))
            return result

        for row in df.to_dict(orient="records"):
            holding = self._parse_row(row, result.messages)
            if holding is not None:
                result.holdings.append(holding)

        LOGGER.info(
            "Parsed %d holdings from CSV (%d rows rejected)",
            len(result.holdings),
            len(result.messages),
        )
        return result

    @staticmethod
    def _parse_row(row: dict, messages: List[ServiceMessage]) -> Holding | None:
        def cell(column: str) -> str:
            return str(row.get(column) or "").strip()

        ticker = cell(TICKER_COLUMN)
        volume = cell(SHARES_COLUMN)

        if not ticker:
            messages.append(ServiceMessage.error(f"Row missing ticker ({TICKER_COLUMN})"))
            return None
        if not volume:
            messages.append(
                ServiceMessage.error(
                    f"Row with ticker {ticker} missing shares ({SHARES_COLUMN})", ticker
                )
            )
            return None

        try:
            shares = parse_swedish_decimal(volume)
        except ValueError:
            shares = math.nan
        if math.isnan(shares) or shares <= 0:
            messages.append(
                ServiceMessage.error(f"Invalid share count for {ticker}: {volume}", ticker)
            )
            return None

        return Holding(
            ticker=ticker,
            name=cell(NAME_COLUMN) or ticker,
            shares=shares,
            currency=cell(CURRENCY_COLUMN) or "SEK",
            isin=cell(ISIN_COLUMN),
            type=cell(TYPE_COLUMN) or "UNKNOWN",
        )
