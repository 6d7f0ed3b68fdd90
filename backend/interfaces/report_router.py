"""Reporting endpoints: annual period supplies statistics."""
from __future__ import annotations

from typing import Dict, Union

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlmodel import Session

from app.config import AppConfig
from application.period_supply_report_service import PeriodSupplyReportService
from infrastructure.models import OrganizationModel
from interfaces import deps

router = APIRouter(prefix="/reports", tags=["report"])


class ReportSectionResponse(BaseModel):
    name: str
    entries: Dict[str, Union[int, str]] = Field(..., description="label -> formatted value, display order")


@router.get("/period-supplies", response_model=ReportSectionResponse)
def get_period_supplies_report(
    organization_id: int = Query(...),
    year: int = Query(..., ge=1900, le=9999),
    session: Session = Depends(deps.get_session),
    settings: AppConfig = Depends(deps.get_settings_dependency),
) -> ReportSectionResponse:
    organization = session.get(OrganizationModel, organization_id)
    if not organization:
        raise HTTPException(status_code=404, detail="Organization not found")

    service = PeriodSupplyReportService(
        year=year,
        organization=organization,
        session=session,
        config=settings,
    )
    return ReportSectionResponse(**service.report())
