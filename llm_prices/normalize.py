"""
Field normalisation shared by the provider fetchers.
"""

import math
from typing import Any, Optional

TOKENS_PER_MILLION = 1_000_000


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    # Negative prices are sentinels upstream (e.g. variable-priced routers).
    if math.isnan(number) or number < 0:
        return None
    return number


def per_million(per_token: Any) -> Optional[float]:
    """
    Convert a per-token USD price (number or numeric string) to USD per 1M
    tokens.  Missing, unparseable, or negative input gives None; 0 stays 0.
    """
    number = _to_float(per_token)
    if number is None:
        return None
    return number * TOKENS_PER_MILLION


def price(value: Any) -> Optional[float]:
    """Parse a price the provider already reports per 1M tokens."""
    return _to_float(value)


def context_length(entry: dict, *fields: str) -> Optional[int]:
    """Return the first non-null integer value among ``fields``."""
    for name in fields:
        value = entry.get(name)
        if value is None or isinstance(value, bool):
            continue
        try:
            return int(value)
        except (TypeError, ValueError):
            continue
    return None


def description(entry: dict) -> str:
    return entry.get("description") or ""
