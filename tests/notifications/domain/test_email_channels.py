"""Tests for email channel adapters and the channel registry."""

import json
import smtplib

import httpx
import pytest
from notifications.channel import get_email_channel, reset_channels, set_email_channel
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.channel.resend_email import RESEND_API_URL, ResendEmailAdapter
from notifications.channel.smtp_email import SmtpEmailAdapter
from notifications.config import NotificationSettings


class TestFakeEmailAdapter:
    def setup_method(self):
        self.adapter = FakeEmailAdapter()

    def test_send_records_email(self):
        result = self.adapter.send(to="test@example.com", subject="Hi", body="Hello!")
        assert result["status"] == "sent"
        assert result["message_id"].startswith("email-")
        assert self.adapter.sent_emails[0]["to"] == "test@example.com"

    def test_send_failure(self):
        self.adapter.configure(should_succeed=False, failure_reason="SMTP error")
        result = self.adapter.send(to="a@b.com", subject="Hi", body="Hello")
        assert result["status"] == "failed"
        assert result["error"] == "SMTP error"
        assert self.adapter.sent_emails == []

    def test_timed_out_failure(self):
        self.adapter.configure(should_succeed=False, timed_out=True)
        assert self.adapter.send(to="a@b.com", subject="Hi", body="Hello")["timed_out"] is True

    def test_reset(self):
        self.adapter.send(to="a@b.com", subject="Hi", body="Hello")
        self.adapter.configure(should_succeed=False, timed_out=True)
        self.adapter.reset()
        assert self.adapter.sent_emails == []
        assert self.adapter.should_succeed is True
        assert self.adapter.timed_out is False


class _FakeSMTP:
    """Stands in for ``smtplib.SMTP`` and records what the adapter does."""

    instances: list["_FakeSMTP"] = []
    error: Exception | None = None

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.started_tls = False
        self.logged_in = None
        self.messages = []
        _FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self, context=None):
        self.started_tls = True

    def login(self, user, password):
        self.logged_in = (user, password)

    def send_message(self, message):
        if _FakeSMTP.error is not None:
            raise _FakeSMTP.error
        self.messages.append(message)


class TestSmtpEmailAdapter:
    def setup_method(self):
        _FakeSMTP.instances = []
        _FakeSMTP.error = None

    def _adapter(self, **overrides):
        options = {
            "host": "smtp.example.com",
            "port": 587,
            "user": "orders@audiophile.com",
            "password": "secret",
            "timeout": 5.0,
            "smtp_factory": _FakeSMTP,
        }
        options.update(overrides)
        return SmtpEmailAdapter(**options)

    def test_sends_multipart_message(self):
        result = self._adapter().send(to="a@b.com", subject="Hi", body="Hello", html_body="<b>Hello</b>")

        assert result["status"] == "sent"
        client = _FakeSMTP.instances[0]
        assert (client.host, client.port, client.timeout) == ("smtp.example.com", 587, 5.0)
        assert client.started_tls is True
        assert client.logged_in == ("orders@audiophile.com", "secret")

        message = client.messages[0]
        assert message["To"] == "a@b.com"
        assert message["From"] == "Audiophile <orders@audiophile.com>"
        assert message.is_multipart()
        assert result["message_id"] == message["Message-ID"]

    def test_secure_connection_skips_starttls(self):
        self._adapter(secure=True, port=465).send(to="a@b.com", subject="Hi", body="Hello")
        assert _FakeSMTP.instances[0].started_tls is False

    def test_user_is_required(self):
        result = self._adapter(user=None).send(to="a@b.com", subject="Hi", body="Hello")

        assert result["status"] == "failed"
        assert "SMTP_USER" in result["error"]
        assert _FakeSMTP.instances == []

    def test_smtp_error(self):
        _FakeSMTP.error = smtplib.SMTPRecipientsRefused({"a@b.com": (550, b"No such user")})

        result = self._adapter().send(to="a@b.com", subject="Hi", body="Hello")

        assert result["status"] == "failed"
        assert not result.get("timed_out")

    def test_timeout(self):
        _FakeSMTP.error = TimeoutError("timed out")

        result = self._adapter().send(to="a@b.com", subject="Hi", body="Hello")

        assert result["status"] == "failed"
        assert result["timed_out"] is True


class TestResendEmailAdapter:
    def _adapter(self, handler, api_key="re_test"):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return ResendEmailAdapter(api_key=api_key, from_address="orders@audiophile.com", client=client)

    def test_sends_message(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"id": "re-msg-1"})

        result = self._adapter(handler).send(to="a@b.com", subject="Hi", body="Hello", html_body="<b>Hello</b>")

        assert result == {"message_id": "re-msg-1", "status": "sent"}
        request = requests[0]
        assert str(request.url) == RESEND_API_URL
        assert request.headers["Authorization"] == "Bearer re_test"
        body = json.loads(request.content)
        assert body["to"] == ["a@b.com"]
        assert body["html"] == "<b>Hello</b>"

    def test_api_key_is_required(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"id": "re-msg-1"})

        result = self._adapter(handler, api_key=None).send(to="a@b.com", subject="Hi", body="Hello")

        assert result["status"] == "failed"
        assert requests == []

    def test_accepted_without_a_body(self):
        result = self._adapter(lambda request: httpx.Response(202)).send(to="a@b.com", subject="Hi", body="Hello")

        assert result == {"message_id": None, "status": "sent"}

    def test_accepted_with_a_non_object_body(self):
        result = self._adapter(lambda request: httpx.Response(200, json=["queued"])).send(
            to="a@b.com", subject="Hi", body="Hello"
        )

        assert result == {"message_id": None, "status": "sent"}

    def test_error_status(self):
        result = self._adapter(lambda request: httpx.Response(422, text="invalid from")).send(
            to="a@b.com", subject="Hi", body="Hello"
        )

        assert result["status"] == "failed"
        assert "422" in result["error"]

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        result = self._adapter(handler).send(to="a@b.com", subject="Hi", body="Hello")

        assert result["status"] == "failed"
        assert result["timed_out"] is True

    def test_close_releases_its_own_client(self):
        adapter = ResendEmailAdapter(api_key="re_test", from_address="orders@audiophile.com")
        adapter.close()
        assert adapter.client.is_closed

    def test_close_leaves_a_shared_client_open(self):
        client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        ResendEmailAdapter(api_key="re_test", from_address="orders@audiophile.com", client=client).close()
        assert not client.is_closed


class TestEmailChannelRegistry:
    def teardown_method(self):
        reset_channels()

    def test_fake_by_default(self):
        assert isinstance(get_email_channel(NotificationSettings()), FakeEmailAdapter)

    def test_channel_is_a_singleton(self):
        assert get_email_channel(NotificationSettings()) is get_email_channel()

    def test_smtp_provider(self):
        channel = get_email_channel(NotificationSettings(email_provider="smtp", smtp_user="a@b.com"))
        assert isinstance(channel, SmtpEmailAdapter)

    def test_resend_provider(self):
        channel = get_email_channel(NotificationSettings(email_provider="resend", resend_api_key="re_test"))
        assert isinstance(channel, ResendEmailAdapter)

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            get_email_channel(NotificationSettings(email_provider="pigeon"))

    def test_reset_closes_the_current_channel(self):
        channel = get_email_channel(NotificationSettings(email_provider="resend", resend_api_key="re_test"))

        reset_channels()

        assert channel.client.is_closed

    def test_set_email_channel(self):
        adapter = FakeEmailAdapter()
        set_email_channel(adapter)
        assert get_email_channel() is adapter
