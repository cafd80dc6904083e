"""Conversion of amounts into the reporting currency."""
from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from ..config import EXCHANGE_RATES_TO_USD, REPORTING_CURRENCY
from ..messages import ServiceMessage


class CurrencyNormalizer:
    """Converts amounts into USD using a static rate table.

    Currencies missing from the table are treated as already being in the
    reporting currency (rate 1.0) instead of raising.
    """

    def __init__(self, rates: Optional[Mapping[str, float]] = None) -> None:
        self._rates = dict(rates if rates is not None else EXCHANGE_RATES_TO_USD)

    @property
    def reporting_currency(self) -> str:
        return REPORTING_CURRENCY

    def rate_for(self, currency: str) -> float:
        return self._rates.get(currency, 1.0)

    def convert(self, amount: float, currency: str) -> float:
        return amount * self.rate_for(currency)

    def unknown_currencies(self, currencies: Iterable[str]) -> List[ServiceMessage]:
        messages: List[ServiceMessage] = []
        for currency in sorted(set(currencies)):
            if currency in self._rates:
                continue
            messages.append(
                ServiceMessage.warning(
                    f"No exchange rate configured for {currency}; "
                    f"assuming parity with {REPORTING_CURRENCY}."
                )
            )
        return messages


_DEFAULT_NORMALIZER = CurrencyNormalizer()


def convert(amount: float, currency: str) -> float:
    """Convert ``amount`` in ``currency`` into the reporting currency."""
    return _DEFAULT_NORMALIZER.convert(amount, currency)
