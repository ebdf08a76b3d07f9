"""SMS channel registry.

Provides singleton access to the configured SMS adapter. The fake adapter is
used unless ``SMS_PROVIDER=twilio`` is set.
"""

from notifications.channel.sms_port import SMSPort
from storefront.config import sms_provider, sms_timeout_seconds, twilio_credentials

_sms_channel: SMSPort | None = None


def get_sms_channel() -> SMSPort:
    """Return the configured SMS adapter, creating it on first use."""
    global _sms_channel
    if _sms_channel is None:
        provider = sms_provider()
        if provider == "twilio":
            from notifications.channel.twilio_sms import TwilioSMSAdapter

            _sms_channel = TwilioSMSAdapter(timeout=sms_timeout_seconds(), **twilio_credentials())
        elif provider == "fake":
            from notifications.channel.fake_sms import FakeSMSAdapter

            _sms_channel = FakeSMSAdapter()
        else:
            raise ValueError(f"Unknown SMS provider: {provider}")

    return _sms_channel


def set_sms_channel(channel: SMSPort) -> None:
    global _sms_channel
    _sms_channel = channel


def reset_channels():
    """Drop the cached adapter so the next call re-reads configuration (useful for testing)."""
    global _sms_channel
    _sms_channel = None
