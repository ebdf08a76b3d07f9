"""Twilio SMS adapter: sends through the Twilio Messages REST endpoint."""

import requests
import structlog

from notifications.channel.sms_port import SMSPort

logger = structlog.get_logger(__name__)

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"


class TwilioSMSAdapter(SMSPort):
    def __init__(self, account_sid: str, auth_token: str, from_number: str, timeout: float = 5.0, session=None):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def messages_url(self) -> str:
        return f"{TWILIO_API_BASE}/Accounts/{self.account_sid}/Messages.json"

    def send(self, to: str, body: str) -> dict:
        if not (self.account_sid and self.auth_token and self.from_number):
            return {"message_id": None, "status": "failed", "error": "Twilio credentials are not configured"}

        response = self.session.post(
            self.messages_url,
            data={"To": to, "From": self.from_number, "Body": body},
            auth=(self.account_sid, self.auth_token),
            timeout=self.timeout,
        )

        if response.status_code >= 400:
            try:
                error = response.json().get("message", response.text)
            except ValueError:
                error = response.text
            logger.warning("Twilio rejected SMS", to=to, status_code=response.status_code, error=error)
            return {"message_id": None, "status": "failed", "error": error}

        sid = response.json().get("sid")
        return {"message_id": sid, "status": "sent"}
