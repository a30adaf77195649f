from __future__ import annotations

from api.core import config as core_config
from api.core import rate_limiter


def _login(client, forwarded_for):
    return client.post(
        "/api/users/login",
        json={"email": "x@example.com", "password": "nope"},
        headers={"X-Forwarded-For": forwarded_for},
    )


def test_forwarded_header_from_untrusted_peer_is_ignored(client):
    codes = [_login(client, f"10.0.0.{i}").status_code for i in range(11)]
    assert codes[:10] == [401] * 10
    assert codes[10] == 429


def test_forwarded_header_from_trusted_proxy_is_honoured(client, monkeypatch):
    # TestClient connects from the peer "testclient"
    monkeypatch.setenv("TRUSTED_PROXIES", "testclient")
    core_config.get_settings.cache_clear()

    for _ in range(10):
        assert _login(client, "10.0.0.1").status_code == 401
    assert _login(client, "10.0.0.1").status_code == 429
    # another client behind the same proxy keeps its own budget
    assert _login(client, "10.0.0.2").status_code == 401


def test_expired_windows_are_evicted(monkeypatch):
    limiter = rate_limiter._RateLimiter()
    clock = [1000.0]
    monkeypatch.setattr(rate_limiter.time, "time", lambda: clock[0])

    for i in range(50):
        limiter.hit(f"login:10.0.0.{i}", 10, 60)
    assert len(limiter) == 50

    clock[0] += 61
    assert limiter.hit("login:10.0.0.1", 10, 60) == 9
    assert len(limiter) == 1
