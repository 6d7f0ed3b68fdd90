"""Parent kinds a line item can be attached to."""
from __future__ import annotations

from enum import Enum


class ItemizableType(str, Enum):
    DISTRIBUTION = "Distribution"
    PURCHASE = "Purchase"
    DONATION = "Donation"
    KIT = "Kit"
