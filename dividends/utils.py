"""Small text helpers shared by the services and the UI."""
from __future__ import annotations

import re

_CORPORATE_SUFFIXES = (
    "Incorporated",
    "Corporation",
    "Company",
    "Limited",
    "Holdings",
    "Holding",
    "Group",
    r"Inc\.?",
    r"Corp\.?",
    r"Co\.?",
    r"Ltd\.?",
    "LLC",
    r"L\.L\.C\.?",
    "SA",
    r"S\.A\.?",
    "NV",
    r"N\.V\.?",
    "AG",
    "SE",
    "plc",
)

_SUFFIX_PATTERN = re.compile(
    r"[,\s]+(" + "|".join(_CORPORATE_SUFFIXES) + r")\s*$",
    re.IGNORECASE,
)


def clean_stock_name(name: str) -> str:
    """Strip trailing corporate suffixes such as "Inc" or "Holdings Ltd".

    Returns ``name`` unchanged when nothing would be left.
    """

    if not name:
        return name

    cleaned = name.strip()
    previous = None
    while cleaned != previous:
        previous = cleaned
        cleaned = _SUFFIX_PATTERN.sub("", cleaned).strip()
    return cleaned or name
