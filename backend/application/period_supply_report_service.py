"""Year-end statistics about the period supplies an organization handed out."""
from __future__ import annotations

from typing import Any, Dict, Optional, TYPE_CHECKING

from app.config import get_settings
from app.logger import get_logger
from application.formatting import (
    number_to_currency,
    number_with_delimiter,
    percent,
    round_half_up,
)
from domain.itemizable import ItemizableType
from domain.report import ReportSection
from infrastructure import period_supply_queries as queries

if TYPE_CHECKING:
    from sqlmodel import Session

    from app.config import AppConfig
    from infrastructure.models import OrganizationModel

logger = get_logger(__name__)

REPORT_NAME = "Period Supplies"


class PeriodSupplyReportService:
    """
    Computes the period supplies section of an organization's annual report.

    Read-only; sub-aggregates that feed several entries are cached on the
    instance, so a fresh instance is built per request.
    """

    def __init__(
        self,
        year: int,
        organization: "OrganizationModel",
        session: "Session",
        config: Optional["AppConfig"] = None,
    ):
        self.year = year
        self.organization = organization
        self.session = session
        self.config = config or get_settings()
        self._apply_report_config()

        self._report: Optional[Dict[str, Any]] = None
        self._distributed_supplies: Optional[int] = None
        self._purchased_supplies: Optional[int] = None
        self._donated_supplies: Optional[int] = None
        self._total_supplies: Optional[int] = None

    def _apply_report_config(self) -> None:
        report_cfg = self.config.reports or {}
        self.default_distribution_quantity = int(report_cfg.get("default_distribution_quantity", 50))
        self.currency_unit = str(report_cfg.get("currency_unit", "$"))
        self.currency_precision = int(report_cfg.get("currency_precision", 2))

    @property
    def organization_id(self) -> int:
        return self.organization.id

    def report(self) -> Dict[str, Any]:
        if self._report is not None:
            return self._report

        monthly = self.monthly_supplies()
        section = ReportSection(name=REPORT_NAME)
        section.add("Period supplies distributed", number_with_delimiter(self.total_distributed_period_supplies()))
        section.add("Period supplies per adult per month", round_half_up(monthly) if monthly is not None else 0)
        section.add("Period supplies", self.types_of_supplies())
        section.add("% period supplies donated", percent(self.percent_donated()))
        section.add("% period supplies bought", percent(self.percent_bought()))
        section.add(
            "Money spent purchasing period supplies",
            number_to_currency(
                self.money_spent_on_supplies(),
                unit=self.currency_unit,
                precision=self.currency_precision,
            ),
        )

        self._report = section.to_dict()
        logger.info(
            "Built period supplies report for organization %s, year %s",
            self.organization_id,
            self.year,
        )
        return self._report

    # Distributed --------------------------------------------------------
    def distributed_loose_period_supplies(self) -> int:
        if self._distributed_supplies is None:
            self._distributed_supplies = queries.distributed_loose_quantity(
                self.session, self.organization_id, self.year
            )
            logger.debug("Loose period supplies distributed: %s", self._distributed_supplies)
        return self._distributed_supplies

    def distributed_period_supplies_from_kits(self) -> int:
        quantity = queries.distributed_kit_quantity(self.session, self.organization_id, self.year)
        logger.debug("Period supplies distributed inside kits: %s", quantity)
        return quantity

    def total_distributed_period_supplies(self) -> int:
        return self.distributed_loose_period_supplies() + self.distributed_period_supplies_from_kits()

    def monthly_supplies(self) -> Optional[float]:
        # "Per adult per month" is the plain mean of each distributed item's
        # distribution_quantity; no time normalisation is applied.
        return queries.average_distribution_quantity(
            self.session,
            self.organization_id,
            self.year,
            self.default_distribution_quantity,
        )

    def types_of_supplies(self) -> str:
        names = queries.period_supply_item_names(self.session, self.organization_id)
        return ", ".join(sorted(set(names)))

    # Acquired -----------------------------------------------------------
    def percent_donated(self) -> float:
        if self.total_supplies() == 0:
            return 0.0
        return (self.donated_supplies() / float(self.total_supplies())) * 100

    def percent_bought(self) -> float:
        if self.total_supplies() == 0:
            return 0.0
        return (self.purchased_supplies() / float(self.total_supplies())) * 100

    def money_spent_on_supplies(self) -> float:
        return queries.money_spent_cents(self.session, self.organization_id, self.year) / 100.0

    def purchased_supplies(self) -> int:
        if self._purchased_supplies is None:
            self._purchased_supplies = queries.acquired_quantity(
                self.session, self.organization_id, self.year, ItemizableType.PURCHASE
            )
        return self._purchased_supplies

    def donated_supplies(self) -> int:
        if self._donated_supplies is None:
            self._donated_supplies = queries.acquired_quantity(
                self.session, self.organization_id, self.year, ItemizableType.DONATION
            )
        return self._donated_supplies

    def total_supplies(self) -> int:
        if self._total_supplies is None:
            self._total_supplies = self.purchased_supplies() + self.donated_supplies()
        return self._total_supplies
