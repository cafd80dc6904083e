"""Feedback messages returned by services to the UI layer."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MessageLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ServiceMessage:
    level: MessageLevel
    text: str
    ticker: Optional[str] = None

    @classmethod
    def warning(cls, text: str, ticker: Optional[str] = None) -> "ServiceMessage":
        return cls(MessageLevel.WARNING, text, ticker)

    @classmethod
    def error(cls, text: str, ticker: Optional[str] = None) -> "ServiceMessage":
        return cls(MessageLevel.ERROR, text, ticker)
