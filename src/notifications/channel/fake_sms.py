"""Fake SMS adapter: records sent messages for testing and local runs."""

from uuid import uuid4

import structlog

from notifications.channel.sms_port import SMSPort

logger = structlog.get_logger(__name__)


class FakeSMSAdapter(SMSPort):
    """SMS adapter that keeps messages in memory for test assertions."""

    def __init__(self):
        self.sent_messages: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "SMS delivery failed"
        self.raise_error = False

    def configure(self, should_succeed: bool = True, failure_reason: str = "SMS delivery failed", raise_error=False):
        """Make the next sends fail, either with a failed receipt or by raising like a broken gateway."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_error = raise_error

    def send(self, to: str, body: str) -> dict:
        if self.raise_error:
            raise ConnectionError(self.failure_reason)

        if not self.should_succeed:
            return {
                "message_id": None,
                "status": "failed",
                "error": self.failure_reason,
            }

        message_id = f"sms-{uuid4().hex[:12]}"
        self.sent_messages.append({"message_id": message_id, "to": to, "body": body})
        logger.debug("Fake SMS recorded", to=to, message_id=message_id)

        return {"message_id": message_id, "status": "sent"}

    def messages_to(self, to: str) -> list[dict]:
        return [m for m in self.sent_messages if m["to"] == to]

    def reset(self):
        """Clear sent messages (useful between tests)."""
        self.sent_messages.clear()
        self.should_succeed = True
        self.failure_reason = "SMS delivery failed"
        self.raise_error = False
