"""Aggregate queries behind the period supplies report.

Every statement is composed with the SQLAlchemy expression language so the
kit join and the plain aggregates share one parameter-binding path.
"""
from __future__ import annotations

from typing import Any, List, Optional, Type

from sqlalchemy import and_, extract, func, not_, or_
from sqlalchemy.orm import aliased
from sqlmodel import Session, select

from domain.itemizable import ItemizableType
from domain.period_supplies import DIAPER_MARKER, PERIOD_SUPPLIES_MARKER
from infrastructure.models import (
    BaseItemModel,
    DistributionModel,
    DonationModel,
    ItemModel,
    KitModel,
    LineItemModel,
    PurchaseModel,
)


def period_supply_clause(base_item: Any):
    """SQL form of ``domain.period_supplies.is_period_supply`` for a base item table or alias."""
    category = func.lower(base_item.category)
    name = func.lower(base_item.name)
    return and_(
        category.like(f"%{PERIOD_SUPPLIES_MARKER}%"),
        not_(
            or_(
                category.like(f"%{DIAPER_MARKER}%"),
                name.like(f"%{DIAPER_MARKER}%"),
            )
        ),
    )


def for_year(column: Any, year: int):
    return extract("year", column) == year


def _attached_to(line_item: Any, itemizable_type: ItemizableType, parent_id: Any):
    return and_(
        line_item.itemizable_type == itemizable_type.value,
        line_item.itemizable_id == parent_id,
    )


def _distributed_period_supplies(stmt, organization_id: int, year: int):
    """Join distributions in the year to their period-supply line items."""
    return (
        stmt.select_from(DistributionModel)
        .join(
            LineItemModel,
            _attached_to(LineItemModel, ItemizableType.DISTRIBUTION, DistributionModel.id),
        )
        .join(ItemModel, ItemModel.id == LineItemModel.item_id)
        .join(BaseItemModel, BaseItemModel.partner_key == ItemModel.partner_key)
        .where(DistributionModel.organization_id == organization_id)
        .where(for_year(DistributionModel.issued_at, year))
        .where(period_supply_clause(BaseItemModel))
    )


def distributed_loose_quantity(session: Session, organization_id: int, year: int) -> int:
    stmt = _distributed_period_supplies(
        select(func.coalesce(func.sum(LineItemModel.quantity), 0)),
        organization_id,
        year,
    )
    return int(session.exec(stmt).one() or 0)


def distributed_kit_quantity(session: Session, organization_id: int, year: int) -> int:
    """Kit quantity distributed multiplied by each qualifying inner item's quantity per kit."""
    kit_line_items = aliased(LineItemModel, name="kit_line_items")
    kit_items = aliased(ItemModel, name="kit_items")

    stmt = (
        select(func.sum(LineItemModel.quantity * kit_line_items.quantity))
        .select_from(DistributionModel)
        .join(
            LineItemModel,
            _attached_to(LineItemModel, ItemizableType.DISTRIBUTION, DistributionModel.id),
        )
        .join(ItemModel, ItemModel.id == LineItemModel.item_id)
        .join(KitModel, KitModel.id == ItemModel.kit_id)
        .join(kit_line_items, _attached_to(kit_line_items, ItemizableType.KIT, KitModel.id))
        .join(kit_items, kit_items.id == kit_line_items.item_id)
        .join(BaseItemModel, BaseItemModel.partner_key == kit_items.partner_key)
        .where(DistributionModel.organization_id == organization_id)
        .where(for_year(DistributionModel.issued_at, year))
        .where(period_supply_clause(BaseItemModel))
    )
    return int(session.exec(stmt).one() or 0)


def average_distribution_quantity(
    session: Session, organization_id: int, year: int, default_quantity: int
) -> Optional[float]:
    """Mean per-recipient quantity of the distributed period-supply items, None when nothing matched."""
    stmt = _distributed_period_supplies(
        select(func.avg(func.coalesce(ItemModel.distribution_quantity, default_quantity))),
        organization_id,
        year,
    )
    value = session.exec(stmt).one()
    return None if value is None else float(value)


def period_supply_item_names(session: Session, organization_id: int) -> List[str]:
    stmt = (
        select(ItemModel.name)
        .distinct()
        .join(BaseItemModel, BaseItemModel.partner_key == ItemModel.partner_key)
        .where(ItemModel.organization_id == organization_id)
        .where(period_supply_clause(BaseItemModel))
    )
    return list(session.exec(stmt).all())


_ACQUISITION_TABLES = {
    ItemizableType.PURCHASE: PurchaseModel,
    ItemizableType.DONATION: DonationModel,
}


def acquired_quantity(
    session: Session, organization_id: int, year: int, itemizable_type: ItemizableType
) -> int:
    """Period-supply quantity on the organization's purchases or donations issued in the year."""
    table: Type[Any] = _ACQUISITION_TABLES[itemizable_type]
    parent_ids = (
        select(table.id)
        .where(table.organization_id == organization_id)
        .where(for_year(table.issued_at, year))
    )
    stmt = (
        select(func.coalesce(func.sum(LineItemModel.quantity), 0))
        .select_from(LineItemModel)
        .join(ItemModel, ItemModel.id == LineItemModel.item_id)
        .join(BaseItemModel, BaseItemModel.partner_key == ItemModel.partner_key)
        .where(LineItemModel.itemizable_type == itemizable_type.value)
        .where(LineItemModel.itemizable_id.in_(parent_ids))
        .where(period_supply_clause(BaseItemModel))
    )
    return int(session.exec(stmt).one() or 0)


def money_spent_cents(session: Session, organization_id: int, year: int) -> int:
    stmt = (
        select(func.coalesce(func.sum(PurchaseModel.amount_spent_on_period_supplies_cents), 0))
        .where(PurchaseModel.organization_id == organization_id)
        .where(for_year(PurchaseModel.issued_at, year))
    )
    return int(session.exec(stmt).one() or 0)
