"""Membership rule for "period supplies" catalog items.

The upstream category taxonomy is inconsistent: some diaper products carry a
category that also mentions period supplies. An item qualifies only when its
category mentions period supplies and neither its category nor its name
mentions diapers.
"""
from __future__ import annotations

from typing import Optional

PERIOD_SUPPLIES_MARKER = "period supplies"
DIAPER_MARKER = "diaper"


def is_period_supply(category: Optional[str], name: Optional[str]) -> bool:
    category_lower = (category or "").lower()
    name_lower = (name or "").lower()
    if PERIOD_SUPPLIES_MARKER not in category_lower:
        return False
    return DIAPER_MARKER not in category_lower and DIAPER_MARKER not in name_lower
