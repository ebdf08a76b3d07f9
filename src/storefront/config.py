"""Runtime settings read from the environment.

Values are read on every call so that tests and long-running workers pick up
changes without a restart.
"""

import os


def store_name() -> str:
    return os.getenv("STORE_NAME", "B3 Store")


def store_owner_phone() -> str | None:
    """10-digit number that receives new-order alerts, or None to disable them."""
    return os.getenv("STORE_OWNER_PHONE") or None


def sms_provider() -> str:
    return os.getenv("SMS_PROVIDER", "fake").lower()


def sms_country_code() -> str:
    return os.getenv("SMS_COUNTRY_CODE", "+91")


def sms_timeout_seconds() -> float:
    return float(os.getenv("SMS_TIMEOUT_SECONDS", "5"))


def twilio_credentials() -> dict:
    return {
        "account_sid": os.getenv("TWILIO_ACCOUNT_SID", ""),
        "auth_token": os.getenv("TWILIO_AUTH_TOKEN", ""),
        "from_number": os.getenv("TWILIO_FROM_NUMBER", ""),
    }


def order_commit_attempts() -> int:
    return max(1, int(os.getenv("ORDER_COMMIT_ATTEMPTS", "3")))
