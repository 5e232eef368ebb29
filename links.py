"""
links.py
Deep links handed off to other apps: UPI payment (upi://pay) and
WhatsApp chat (https://wa.me/).

Both builders return "" when the payee / phone is not configured, so
callers can show a "not configured" state instead of a broken link.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from urllib.parse import quote, urlencode

from models import CURRENCY, SOCIETY_NAME, BillingPeriod, NotificationLinkRequest, PaymentLinkRequest

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


def _format_amount(amount) -> str:
    # 1500 -> "1500", 1500.0 -> "1500", 1500.5 -> "1500.5"
    return format(Decimal(str(amount)).normalize(), "f")


def build_upi_link(payee_id: str, amount, note: str) -> str:
    """
    The amount is passed through as-is; no paise/rupee conversion happens here.
    """
    if not payee_id:
        logger.debug("UPI ID not configured, skipping payment link")
        return ""

    params = urlencode({
        "pa": payee_id,
        "pn": SOCIETY_NAME,
        "am": _format_amount(amount),
        "cu": CURRENCY,
        "tn": note,
    }, safe="*")
    return f"upi://pay?{params}"


def build_whatsapp_link(phone_number: str, message: str) -> str:
    if not phone_number:
        logger.debug("Phone number missing, skipping WhatsApp link")
        return ""

    digits = _NON_DIGITS.sub("", phone_number)
    text = quote(message, safe="!~*'()")
    return f"https://wa.me/{digits}?text={text}"


def build_payment_link(request: PaymentLinkRequest) -> str:
    return build_upi_link(request.payee_id, request.amount, request.note)


def build_notification_link(request: NotificationLinkRequest) -> str:
    return build_whatsapp_link(request.phone_number, request.message)


def maintenance_note(period: BillingPeriod) -> str:
    return f"Maintenance {period.label}"
