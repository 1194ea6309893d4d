# parking_api/services/notification_service.py
"""
Outgoing e-mail (welcome mail, payment receipts).
Sends through a Brevo-compatible transactional e-mail HTTP API.
With no EMAIL_API_KEY configured, messages are only logged.

Callers treat delivery as best-effort: NotificationError is logged and
swallowed, never surfaced to the API client.
"""

import requests
from typing import Optional
from parking_api.config import settings
from parking_api.utils.logger import get_logger

logger = get_logger(__name__)


class NotificationError(Exception):
    pass


def send_email(to: str, subject: str, text: str, html: Optional[str] = None) -> None:
    if not settings.EMAIL_API_KEY:
        logger.info(f"[MAIL] (disabled) to={to} subject={subject!r}")
        return

    payload = {
        "sender": {"email": settings.EMAIL_FROM, "name": settings.EMAIL_FROM_NAME},
        "to": [{"email": to}],
        "subject": subject,
        "textContent": text,
    }
    if html:
        payload["htmlContent"] = html

    try:
        resp = requests.post(
            settings.EMAIL_API_URL,
            json=payload,
            headers={"api-key": settings.EMAIL_API_KEY, "accept": "application/json"},
            timeout=settings.EMAIL_TIMEOUT_SECONDS,
        )
    except requests.exceptions.RequestException as e:
        raise NotificationError(f"E-mail API unreachable: {e}") from e

    if resp.status_code >= 400:
        raise NotificationError(f"E-mail API returned http_{resp.status_code}: {resp.text[:200]}")
    logger.info(f"[MAIL] sent to={to} subject={subject!r}")


def send_welcome_email(user) -> None:
    send_email(
        to=user.email,
        subject="Welcome to XWYZ Parking Management System",
        text=f"Hello {user.first_name}, your account has been created successfully.",
        html=f"<p>Hello {user.first_name},</p><p>Your account has been created successfully.</p>",
    )


def send_exit_receipt(to: str, bill) -> None:
    send_email(
        to=to,
        subject="Parking Payment Receipt",
        text=(f"Thank you for using XWYZ Parking. "
              f"Your payment of ${bill.total_amount} has been processed."),
        html=(
            "<h2>XWYZ Parking Receipt</h2>"
            "<p>Thank you for using XWYZ Parking.</p>"
            "<ul>"
            f"<li>Plate Number: {bill.plate_number}</li>"
            f"<li>Parking: {bill.parking_name}</li>"
            f"<li>Entry Time: {bill.entry_date_time}</li>"
            f"<li>Exit Time: {bill.exit_date_time}</li>"
            f"<li>Duration: {bill.duration_in_hours} hours</li>"
            f"<li>Amount: ${bill.total_amount}</li>"
            "</ul>"
        ),
    )
