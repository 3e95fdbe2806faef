"""Transactional e-mail delivery via SendGrid."""

from __future__ import annotations

import json
import logging
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from splitfy.config import get_settings

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a readable description of a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item["message"])
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        return json.dumps(parsed, default=str)

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _log_failure(status_code: Any, body: Any) -> None:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        logger.error("SendGrid request failed with status %s: %s", status_code, details)
    elif status_code:
        logger.error("SendGrid request failed with status %s", status_code)
    elif details:
        logger.error("SendGrid request failed: %s", details)
    else:
        logger.error("SendGrid request failed")


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an e-mail, returning ``False`` when it could not be delivered."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:
        _log_failure(getattr(exc, "status_code", None), getattr(exc, "body", None))
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_failure(status_code, getattr(response, "body", None))
        return False

    return True


def send_contract_invitation_email(
    email: str,
    *,
    collaborator_name: str,
    contract_title: str,
    inviter_name: str,
    role: str,
) -> bool:
    """Invite ``email`` to review and sign a contract."""

    subject = f"You have been invited to sign \"{contract_title}\" on Splitfy"
    html_content = "".join(
        (
            f"<p>Hi {escape(collaborator_name)},</p>",
            f"<p>{escape(inviter_name)} added you as <strong>{escape(role)}</strong> ",
            f"on the contract <strong>{escape(contract_title)}</strong>.</p>",
            "<p>Sign in to Splitfy to review the terms and add your signature.</p>",
        )
    )
    return send_email(subject, html_content, email)


__all__ = ["send_email", "send_contract_invitation_email"]
