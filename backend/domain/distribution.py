"""Distribution-facing value types shared by the mailer and the API."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class UnknownDeliveryMethod(ValueError):
    """A stored delivery method outside the known set."""


class DeliveryMethod(str, Enum):
    PICK_UP = "pick_up"
    DELIVERY = "delivery"
    SHIPPED = "shipped"

    @classmethod
    def parse(cls, value: Optional[str]) -> "DeliveryMethod":
        try:
            return cls(value)
        except ValueError as exc:
            raise UnknownDeliveryMethod(f"Unknown delivery method: {value!r}") from exc

    @property
    def past_tense(self) -> str:
        """Wording used in partner notifications ("picked up", "delivered")."""
        return {
            DeliveryMethod.PICK_UP: "picked up",
            DeliveryMethod.DELIVERY: "delivered",
            DeliveryMethod.SHIPPED: "shipped",
        }[self]

    @property
    def noun(self) -> str:
        """Wording used in reminders ("pick up", "delivery")."""
        return {
            DeliveryMethod.PICK_UP: "pick up",
            DeliveryMethod.DELIVERY: "delivery",
            DeliveryMethod.SHIPPED: "shipment",
        }[self]


@dataclass
class QuantityUpdate:
    name: str
    old_quantity: int
    new_quantity: int


@dataclass
class DistributionChanges:
    """Items removed from, or re-quantified on, an edited distribution."""

    removed: List[str] = field(default_factory=list)
    updates: List[QuantityUpdate] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "DistributionChanges":
        raw = raw or {}
        removed = [str(entry["name"]) for entry in raw.get("removed", [])]
        updates = [
            QuantityUpdate(
                name=str(entry["name"]),
                old_quantity=int(entry["old_quantity"]),
                new_quantity=int(entry["new_quantity"]),
            )
            for entry in raw.get("updates", [])
        ]
        return cls(removed=removed, updates=updates)
