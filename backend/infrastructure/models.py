"""SQLModel ORM tables mirroring the inventory/distribution schema."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def issued_at_field():
    """Timezone-aware issue timestamp; the report buckets rows by its year."""
    return Field(default_factory=_utcnow, sa_type=DateTime(timezone=True), index=True)


class OrganizationModel(SQLModel, table=True):
    __tablename__ = "organizations"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: Optional[str] = Field(default=None)
    default_email_text: Optional[str] = Field(default=None)


class PartnerModel(SQLModel, table=True):
    __tablename__ = "partners"

    id: Optional[int] = Field(default=None, primary_key=True)
    organization_id: int = Field(foreign_key="organizations.id", index=True)
    name: str
    email: str


class PartnerUserModel(SQLModel, table=True):
    __tablename__ = "partner_users"

    id: Optional[int] = Field(default=None, primary_key=True)
    partner_id: int = Field(foreign_key="partners.id", index=True)
    email: str
    name: Optional[str] = Field(default=None)


class RequestModel(SQLModel, table=True):
    """Partner request that a distribution may fulfil."""

    __tablename__ = "requests"

    id: Optional[int] = Field(default=None, primary_key=True)
    organization_id: int = Field(foreign_key="organizations.id", index=True)
    partner_id: int = Field(foreign_key="partners.id", index=True)
    partner_user_id: Optional[int] = Field(default=None, foreign_key="partner_users.id")


class DistributionModel(SQLModel, table=True):
    __tablename__ = "distributions"

    id: Optional[int] = Field(default=None, primary_key=True)
    organization_id: int = Field(foreign_key="organizations.id", index=True)
    partner_id: Optional[int] = Field(default=None, foreign_key="partners.id")
    request_id: Optional[int] = Field(default=None, foreign_key="requests.id")
    issued_at: datetime = issued_at_field()
    delivery_method: str = Field(default="pick_up")  # DeliveryMethod value
    comment: Optional[str] = Field(default=None)


class PurchaseModel(SQLModel, table=True):
    __tablename__ = "purchases"

    id: Optional[int] = Field(default=None, primary_key=True)
    organization_id: int = Field(foreign_key="organizations.id", index=True)
    issued_at: datetime = issued_at_field()
    amount_spent_on_period_supplies_cents: int = Field(default=0)


class DonationModel(SQLModel, table=True):
    __tablename__ = "donations"

    id: Optional[int] = Field(default=None, primary_key=True)
    organization_id: int = Field(foreign_key="organizations.id", index=True)
    issued_at: datetime = issued_at_field()


class BaseItemModel(SQLModel, table=True):
    """Canonical classification shared by every organization's items."""

    __tablename__ = "base_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    partner_key: str = Field(index=True, unique=True)
    name: str
    category: Optional[str] = Field(default=None)


class KitModel(SQLModel, table=True):
    __tablename__ = "kits"

    id: Optional[int] = Field(default=None, primary_key=True)
    organization_id: int = Field(foreign_key="organizations.id", index=True)
    name: str


class ItemModel(SQLModel, table=True):
    __tablename__ = "items"

    id: Optional[int] = Field(default=None, primary_key=True)
    organization_id: int = Field(foreign_key="organizations.id", index=True)
    name: str
    partner_key: str = Field(index=True)  # -> base_items.partner_key
    distribution_quantity: Optional[int] = Field(default=None)
    kit_id: Optional[int] = Field(default=None, foreign_key="kits.id")


class LineItemModel(SQLModel, table=True):
    """Quantity of an item attached to a distribution, purchase, donation or kit."""

    __tablename__ = "line_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    itemizable_type: str = Field(index=True)  # ItemizableType value
    itemizable_id: int = Field(index=True)
    item_id: int = Field(foreign_key="items.id", index=True)
    quantity: int = Field(default=0)
