from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.config import AppConfig
from domain.itemizable import ItemizableType
from infrastructure import models  # noqa: F401  # register tables on the metadata
from infrastructure.models import (
    BaseItemModel,
    DistributionModel,
    DonationModel,
    ItemModel,
    KitModel,
    LineItemModel,
    OrganizationModel,
    PartnerModel,
    PartnerUserModel,
    PurchaseModel,
    RequestModel,
)

REPORT_YEAR = 2024


def at(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        raw={
            "version": "test",
            "reports": {
                "default_distribution_quantity": 50,
                "currency_unit": "$",
                "currency_precision": 2,
            },
            "mailer": {
                "from_address": "no-reply@humanessentials.app",
                "default_email_text": "Fallback %{delivery_method}",
            },
        }
    )


class Factory:
    """Small helpers for seeding rows in a test session."""

    def __init__(self, session: Session):
        self.session = session

    def _save(self, model):
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return model

    def organization(self, name: str = "DEFAULT", email: Optional[str] = None, **kwargs) -> OrganizationModel:
        return self._save(OrganizationModel(name=name, email=email, **kwargs))

    def base_item(self, partner_key: str, name: str, category: str) -> BaseItemModel:
        return self._save(BaseItemModel(partner_key=partner_key, name=name, category=category))

    def item(
        self,
        organization: OrganizationModel,
        name: str,
        base_item: BaseItemModel,
        distribution_quantity: Optional[int] = None,
        kit: Optional[KitModel] = None,
    ) -> ItemModel:
        return self._save(
            ItemModel(
                organization_id=organization.id,
                name=name,
                partner_key=base_item.partner_key,
                distribution_quantity=distribution_quantity,
                kit_id=kit.id if kit else None,
            )
        )

    def kit(self, organization: OrganizationModel, name: str, contents) -> KitModel:
        """Create a kit whose contents is a list of (item, quantity per kit)."""
        kit = self._save(KitModel(organization_id=organization.id, name=name))
        for item, quantity in contents:
            self.line_item(ItemizableType.KIT, kit.id, item, quantity)
        return kit

    def line_item(self, itemizable_type: ItemizableType, parent_id: int, item: ItemModel, quantity: int) -> LineItemModel:
        return self._save(
            LineItemModel(
                itemizable_type=itemizable_type.value,
                itemizable_id=parent_id,
                item_id=item.id,
                quantity=quantity,
            )
        )

    def distribution(
        self,
        organization: OrganizationModel,
        lines=(),
        issued_at: Optional[datetime] = None,
        **kwargs,
    ) -> DistributionModel:
        distribution = self._save(
            DistributionModel(
                organization_id=organization.id,
                issued_at=issued_at or at(REPORT_YEAR, 3, 15, 10, 0),
                **kwargs,
            )
        )
        for item, quantity in lines:
            self.line_item(ItemizableType.DISTRIBUTION, distribution.id, item, quantity)
        return distribution

    def purchase(
        self,
        organization: OrganizationModel,
        lines=(),
        issued_at: Optional[datetime] = None,
        period_supplies_cents: int = 0,
    ) -> PurchaseModel:
        purchase = self._save(
            PurchaseModel(
                organization_id=organization.id,
                issued_at=issued_at or at(REPORT_YEAR, 2, 1),
                amount_spent_on_period_supplies_cents=period_supplies_cents,
            )
        )
        for item, quantity in lines:
            self.line_item(ItemizableType.PURCHASE, purchase.id, item, quantity)
        return purchase

    def donation(self, organization: OrganizationModel, lines=(), issued_at: Optional[datetime] = None) -> DonationModel:
        donation = self._save(
            DonationModel(
                organization_id=organization.id,
                issued_at=issued_at or at(REPORT_YEAR, 1, 10),
            )
        )
        for item, quantity in lines:
            self.line_item(ItemizableType.DONATION, donation.id, item, quantity)
        return donation

    def partner(self, organization: OrganizationModel, name: str = "PARTNER", email: str = "partner@example.com") -> PartnerModel:
        return self._save(PartnerModel(organization_id=organization.id, name=name, email=email))

    def partner_user(self, partner: PartnerModel, email: str) -> PartnerUserModel:
        return self._save(PartnerUserModel(partner_id=partner.id, email=email))

    def request(self, organization: OrganizationModel, partner: PartnerModel, user: Optional[PartnerUserModel] = None) -> RequestModel:
        return self._save(
            RequestModel(
                organization_id=organization.id,
                partner_id=partner.id,
                partner_user_id=user.id if user else None,
            )
        )


@pytest.fixture
def factory(session) -> Factory:
    return Factory(session)


@pytest.fixture
def organization(factory) -> OrganizationModel:
    return factory.organization()


@pytest.fixture
def catalog(factory):
    """Base items covering period supplies, diapers miscategorised as period supplies, and other goods."""
    return {
        "pads": factory.base_item("pads", "Pads", "Period Supplies"),
        "tampons": factory.base_item("tampons", "Tampons", "period supplies - tampons"),
        "liners": factory.base_item("liners", "Liners", "Period Supplies"),
        "adult_diapers": factory.base_item("adult_diapers", "Adult Diapers", "Period Supplies"),
        "diaper_pads": factory.base_item("diaper_pads", "Incontinence Pads", "Diapers - Period Supplies"),
        "wipes": factory.base_item("wipes", "Wipes", "Wipes"),
        "kit": factory.base_item("kit", "Kit", "Kits"),
    }
