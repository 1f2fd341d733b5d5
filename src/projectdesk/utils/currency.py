"""Currency parsing helpers."""

from __future__ import annotations

import re

_CURRENCY_PREFIX = re.compile(r"^\s*[A-Za-z]+\.")
_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
_LEADING_NUMBER = re.compile(r"-?(\d+\.?\d*|\.\d+)")


def parse_budget(value: str | float | int | None) -> float:
    """Convert a budget value such as ``"$125,000"`` into a float.

    Every character other than digits, ``.`` and ``-`` is stripped, then the
    leading number is read. Values without one become ``0.0``.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)

    # "Rs. 1,200" would otherwise leave a leading "."
    text = _CURRENCY_PREFIX.sub("", str(value))
    match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", text))
    return float(match.group()) if match else 0.0
