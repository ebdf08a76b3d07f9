"""Best-effort SMS dispatch.

``notify`` makes exactly one attempt and never raises: an invalid number,
a failed receipt and a gateway exception all come back as a ``failed``
result that callers log and move past.
"""

import re

import structlog

from notifications.channel import get_sms_channel
from storefront.config import sms_country_code

logger = structlog.get_logger(__name__)

_SUBSCRIBER_NUMBER = re.compile(r"^\d{10}$")


def _failed(error: str) -> dict:
    return {"status": "failed", "message_id": None, "error": error}


def notify(phone_number: str, message: str) -> dict:
    """Text ``message`` to a bare 10-digit ``phone_number``.

    Returns:
        dict with keys: status ("sent" or "failed"), message_id, error
    """
    if not phone_number or not message:
        return _failed("Phone number and message are required.")

    if not _SUBSCRIBER_NUMBER.match(phone_number):
        logger.warning("SMS skipped, invalid phone number", phone_number=phone_number)
        return _failed("Invalid phone number format. Must be 10 digits.")

    destination = f"{sms_country_code()}{phone_number}"
    try:
        receipt = get_sms_channel().send(destination, message)
    except Exception as exc:
        logger.error("SMS gateway error", phone_number=phone_number, error=str(exc))
        return _failed(str(exc) or "An unknown error occurred during SMS send.")

    if receipt.get("status") != "sent":
        logger.warning("SMS not delivered", phone_number=phone_number, error=receipt.get("error"))
        return _failed(receipt.get("error") or "SMS delivery failed")

    logger.info("SMS sent", phone_number=phone_number, message_id=receipt.get("message_id"))
    return {"status": "sent", "message_id": receipt.get("message_id"), "error": None}
