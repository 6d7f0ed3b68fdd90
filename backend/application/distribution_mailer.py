"""Partner notifications for distributions (message composition only)."""
from __future__ import annotations

import re
from email.message import EmailMessage
from html import escape
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from app.config import get_settings
from app.logger import get_logger
from domain.distribution import DeliveryMethod, DistributionChanges
from infrastructure.models import (
    DistributionModel,
    OrganizationModel,
    PartnerModel,
    PartnerUserModel,
    RequestModel,
)

if TYPE_CHECKING:
    from sqlmodel import Session

    from app.config import AppConfig

logger = get_logger(__name__)

_PLACEHOLDER = re.compile(r"%\{(\w+)\}")
DATE_FORMAT = "%m/%d/%Y"


def render_email_text(template: str, values: Dict[str, str]) -> str:
    """Fill ``%{name}`` placeholders; unknown names are left untouched."""
    return _PLACEHOLDER.sub(lambda match: values.get(match.group(1), match.group(0)), template)


class DistributionMailer:
    def __init__(self, session: "Session", config: Optional["AppConfig"] = None):
        self.session = session
        self.config = config or get_settings()
        mailer_cfg = self.config.mailer or {}
        self.from_address = str(mailer_cfg.get("from_address", "no-reply@humanessentials.app"))
        self.fallback_email_text = str(mailer_cfg.get("default_email_text", ""))

    # Recipients ----------------------------------------------------------
    def requestee_email(self, distribution: DistributionModel) -> Optional[str]:
        """Email of the partner user behind the request, else the partner's own email."""
        partner = self._partner(distribution)
        partner_email = partner.email if partner else None
        if distribution.request_id is None:
            return partner_email
        request = self.session.get(RequestModel, distribution.request_id)
        if request is None or request.partner_user_id is None:
            return partner_email
        user = self.session.get(PartnerUserModel, request.partner_user_id)
        return user.email if user else partner_email

    def _partner(self, distribution: DistributionModel) -> Optional[PartnerModel]:
        if distribution.partner_id is None:
            return None
        return self.session.get(PartnerModel, distribution.partner_id)

    # Messages ------------------------------------------------------------
    def partner_mailer(
        self,
        organization: OrganizationModel,
        distribution: DistributionModel,
        subject: str,
        distribution_changes: Optional[Dict[str, Any]] = None,
    ) -> EmailMessage:
        partner = self._partner(distribution)
        changes = DistributionChanges.from_dict(distribution_changes)
        method = DeliveryMethod.parse(distribution.delivery_method)

        body = render_email_text(
            organization.default_email_text or self.fallback_email_text,
            {
                "delivery_method": method.past_tense,
                "distribution_date": distribution.issued_at.strftime(DATE_FORMAT),
                "partner_name": partner.name if partner else "",
                "comment": distribution.comment or "",
            },
        )
        change_lines = self._change_lines(changes)

        text_parts = [body.rstrip()]
        if change_lines:
            text_parts.append("Changes to this distribution:\n" + "\n".join(change_lines))
        if organization.email:
            text_parts.append(f"From: {organization.email}")

        html_parts = [f"<p>{escape(body.rstrip()).replace(chr(10), '<br>')}</p>"]
        if change_lines:
            items = "".join(f"<li>{escape(line)}</li>" for line in change_lines)
            html_parts.append(f"<p>Changes to this distribution:</p><ul>{items}</ul>")
        if organization.email:
            html_parts.append(f"<p>From: {self._mailto(organization.email)}</p>")

        message = self._compose(
            to=self.requestee_email(distribution),
            cc=partner.email if partner else None,
            subject=f"{subject} from {organization.name}",
            text="\n\n".join(text_parts) + "\n",
            html="\n".join(html_parts),
        )
        return message

    def reminder_email(self, distribution_id: int) -> EmailMessage:
        distribution = self.session.get(DistributionModel, distribution_id)
        if distribution is None:
            raise LookupError(f"Distribution {distribution_id} not found")
        organization = self.session.get(OrganizationModel, distribution.organization_id)
        partner = self._partner(distribution)
        method = DeliveryMethod.parse(distribution.delivery_method)
        partner_name = partner.name if partner else ""
        date = distribution.issued_at.strftime(DATE_FORMAT)
        contact = organization.email if organization else None

        intro = (
            f"This is a friendly reminder that your distribution is scheduled for "
            f"{method.noun} on {date}."
        )
        text = f"Hello {partner_name},\n\n{intro}\n"
        html = f"<p>Hello {escape(partner_name)},</p>\n<p>{escape(intro)}</p>"
        if contact:
            text += f"\nFor more information: {contact}\n"
            html += f"\n<p>For more information: {self._mailto(contact)}</p>"

        return self._compose(
            to=self.requestee_email(distribution),
            cc=partner.email if partner else None,
            subject=f"{partner_name} Distribution Reminder",
            text=text,
            html=html,
        )

    # Helpers -------------------------------------------------------------
    @staticmethod
    def _change_lines(changes: DistributionChanges) -> List[str]:
        lines = [f"Removed: {name}" for name in changes.removed]
        lines.extend(
            f"{update.name}: {update.old_quantity} -> {update.new_quantity}"
            for update in changes.updates
        )
        return lines

    @staticmethod
    def _mailto(address: str) -> str:
        safe = escape(address)
        return f'<a href="mailto:{safe}">{safe}</a>'

    def _compose(
        self,
        *,
        to: Optional[str],
        cc: Optional[str],
        subject: str,
        text: str,
        html: str,
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.from_address
        if to:
            message["To"] = to
        if cc:
            message["Cc"] = cc
        message["Subject"] = subject
        message.set_content(text)
        message.add_alternative(f"<html><body>\n{html}\n</body></html>\n", subtype="html")
        logger.info("Composed mail %r", subject)
        return message
