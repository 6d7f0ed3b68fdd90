"""Distribution endpoints: previews of the partner reminder email."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlmodel import Session

from domain.distribution import UnknownDeliveryMethod
from interfaces import deps

router = APIRouter(prefix="/distributions", tags=["distribution"])


def _header(message, name: str) -> Optional[str]:
    value = message[name]
    return str(value) if value is not None else None


class MailPreview(BaseModel):
    to: Optional[str] = None
    cc: Optional[str] = None
    sender: str = Field(..., alias="from")
    subject: str
    text: str

    model_config = {"populate_by_name": True}


@router.get("/{distribution_id}/reminder-preview", response_model=MailPreview, response_model_by_alias=True)
def preview_reminder(
    distribution_id: int,
    session: Session = Depends(deps.get_session),
) -> MailPreview:
    mailer = deps.build_mailer(session)
    try:
        message = mailer.reminder_email(distribution_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Distribution not found") from exc
    except UnknownDeliveryMethod as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return MailPreview(
        to=_header(message, "To"),
        cc=_header(message, "Cc"),
        sender=str(message["From"]),
        subject=str(message["Subject"]),
        text=message.get_body(preferencelist=("plain",)).get_content(),
    )
