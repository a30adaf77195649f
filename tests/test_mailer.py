from __future__ import annotations

from api.core import config as core_config
from api.core import mailer


def test_send_email_without_smtp_config(monkeypatch):
    monkeypatch.delenv("SMTP_HOST", raising=False)
    core_config.get_settings.cache_clear()
    try:
        assert mailer.send_email("Assunto", "alice@example.com", "<p>oi</p>") is False
    finally:
        core_config.get_settings.cache_clear()


def test_build_message_has_text_and_html_parts(monkeypatch):
    monkeypatch.setenv("SMTP_FROM", "noreply@taskboard.dev")
    core_config.get_settings.cache_clear()
    try:
        msg = mailer.build_message(
            core_config.get_settings(), "Recuperação", "alice@example.com", "<b>nova</b>", "nova"
        )
    finally:
        core_config.get_settings.cache_clear()
    assert msg["From"] == "noreply@taskboard.dev"
    assert msg["To"] == "alice@example.com"
    types = [part.get_content_type() for part in msg.iter_parts()]
    assert types == ["text/plain", "text/html"]


class _RecordingSMTP:
    instances: list = []

    def __init__(self, host, port, timeout=None, **kwargs):
        self.host, self.port, self.timeout = host, port, timeout
        self.sent = []
        _RecordingSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def ehlo(self):
        pass

    def starttls(self, context=None):
        pass

    def login(self, user, password):
        pass

    def send_message(self, msg):
        self.sent.append(msg)


def test_smtp_connections_use_configured_timeout(monkeypatch):
    for key, value in {
        "SMTP_HOST": "smtp.taskboard.dev",
        "SMTP_USER": "bot",
        "SMTP_PASSWORD": "pw",
        "SMTP_FROM": "noreply@taskboard.dev",
        "SMTP_TIMEOUT_SECONDS": "3",
    }.items():
        monkeypatch.setenv(key, value)
    _RecordingSMTP.instances = []
    monkeypatch.setattr(mailer.smtplib, "SMTP", _RecordingSMTP)
    monkeypatch.setattr(mailer.smtplib, "SMTP_SSL", _RecordingSMTP)
    try:
        for port in ("465", "587"):
            monkeypatch.setenv("SMTP_PORT", port)
            core_config.get_settings.cache_clear()
            assert mailer.send_email("Assunto", "alice@example.com", "<p>oi</p>", "oi") is True
    finally:
        core_config.get_settings.cache_clear()

    assert [(smtp.port, smtp.timeout) for smtp in _RecordingSMTP.instances] == [(465, 3), (587, 3)]
    assert all(len(smtp.sent) == 1 for smtp in _RecordingSMTP.instances)
