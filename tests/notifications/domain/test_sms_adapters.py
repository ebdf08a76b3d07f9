"""Tests for the SMS channel adapters and registry."""

from unittest.mock import MagicMock

import pytest
from notifications.channel import get_sms_channel, reset_channels, set_sms_channel
from notifications.channel.fake_sms import FakeSMSAdapter
from notifications.channel.twilio_sms import TwilioSMSAdapter


class TestFakeSMSAdapter:
    def setup_method(self):
        self.adapter = FakeSMSAdapter()

    def test_send_records_message(self):
        result = self.adapter.send(to="+919876543210", body="Your order is placed")
        assert result["status"] == "sent"
        assert result["message_id"].startswith("sms-")
        assert self.adapter.messages_to("+919876543210")[0]["body"] == "Your order is placed"

    def test_send_failure(self):
        self.adapter.configure(should_succeed=False, failure_reason="Carrier rejected")
        result = self.adapter.send(to="+919876543210", body="Hi")
        assert result == {"message_id": None, "status": "failed", "error": "Carrier rejected"}
        assert self.adapter.sent_messages == []

    def test_raise_error(self):
        self.adapter.configure(raise_error=True, failure_reason="gateway down")
        with pytest.raises(ConnectionError):
            self.adapter.send(to="+919876543210", body="Hi")

    def test_reset(self):
        self.adapter.send(to="+919876543210", body="Hi")
        self.adapter.configure(should_succeed=False, raise_error=True)
        self.adapter.reset()
        assert self.adapter.sent_messages == []
        assert self.adapter.should_succeed is True
        assert self.adapter.raise_error is False


class TestTwilioSMSAdapter:
    def _adapter(self, response):
        session = MagicMock()
        session.post.return_value = response
        adapter = TwilioSMSAdapter(
            account_sid="AC123",
            auth_token="secret",
            from_number="+15005550006",
            timeout=3.0,
            session=session,
        )
        return adapter, session

    def test_posts_to_messages_endpoint(self):
        response = MagicMock(status_code=201)
        response.json.return_value = {"sid": "SM42"}
        adapter, session = self._adapter(response)

        result = adapter.send(to="+919876543210", body="Order placed")

        assert result == {"message_id": "SM42", "status": "sent"}
        session.post.assert_called_once_with(
            "https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json",
            data={"To": "+919876543210", "From": "+15005550006", "Body": "Order placed"},
            auth=("AC123", "secret"),
            timeout=3.0,
        )

    def test_rejection_is_reported(self):
        response = MagicMock(status_code=400, text="bad")
        response.json.return_value = {"message": "The 'To' number is not valid"}
        adapter, _ = self._adapter(response)

        result = adapter.send(to="+91000", body="Hi")

        assert result["status"] == "failed"
        assert result["error"] == "The 'To' number is not valid"

    def test_missing_credentials(self):
        adapter = TwilioSMSAdapter(account_sid="", auth_token="", from_number="", session=MagicMock())
        result = adapter.send(to="+919876543210", body="Hi")
        assert result["status"] == "failed"
        adapter.session.post.assert_not_called()


class TestChannelRegistry:
    def teardown_method(self):
        reset_channels()

    def test_fake_is_the_default(self, monkeypatch):
        monkeypatch.delenv("SMS_PROVIDER", raising=False)
        reset_channels()
        assert isinstance(get_sms_channel(), FakeSMSAdapter)

    def test_singleton(self, monkeypatch):
        monkeypatch.delenv("SMS_PROVIDER", raising=False)
        reset_channels()
        assert get_sms_channel() is get_sms_channel()

    def test_twilio_selected_by_env(self, monkeypatch):
        monkeypatch.setenv("SMS_PROVIDER", "twilio")
        monkeypatch.setenv("TWILIO_ACCOUNT_SID", "AC999")
        reset_channels()

        channel = get_sms_channel()

        assert isinstance(channel, TwilioSMSAdapter)
        assert channel.account_sid == "AC999"

    def test_unknown_provider(self, monkeypatch):
        monkeypatch.setenv("SMS_PROVIDER", "pigeon")
        reset_channels()
        with pytest.raises(ValueError):
            get_sms_channel()

    def test_set_channel(self):
        adapter = FakeSMSAdapter()
        set_sms_channel(adapter)
        assert get_sms_channel() is adapter
