"""SMS channel port: the contract every messaging gateway adapter fulfils."""

from abc import ABC, abstractmethod


class SMSPort(ABC):
    """Abstract interface for SMS gateway adapters."""

    @abstractmethod
    def send(self, to: str, body: str) -> dict:
        """Hand one message to the gateway.

        Args:
            to: Destination in E.164 form, country code included.
            body: Message text.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
