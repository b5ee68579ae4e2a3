import gc
import logging

import pytest
from pubsub import pub

from bundleguard.session import SESSION_CHANGED_TOPIC
from bundleguard.web import create_app

RECORD = {"token": "t", "id": "1", "email": "e@x.com"}


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "cookie-signing-key")
    monkeypatch.setenv("SESSION_SECRET", "session-secret")
    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()


def test_no_session_initially(client):
    resp = client.get("/api/session")

    assert resp.status_code == 200
    assert resp.get_json() == {"user": None}


def test_login_then_restore(client):
    resp = client.post("/api/session", json=RECORD)

    assert resp.status_code == 201
    assert resp.get_json() == {"user": RECORD}

    resp = client.get("/api/session")
    assert resp.get_json() == {"user": RECORD}


def test_session_cookie_holds_ciphertext(client):
    client.post("/api/session", json=RECORD)

    with client.session_transaction() as sess:
        stored = sess["user"]

    assert isinstance(stored, str)
    assert "e@x.com" not in stored


def test_logout_clears_session(client):
    client.post("/api/session", json=RECORD)

    resp = client.delete("/api/session")
    assert resp.status_code == 204

    with client.session_transaction() as sess:
        assert "user" not in sess

    assert client.get("/api/session").get_json() == {"user": None}


def test_incomplete_record_rejected(client):
    resp = client.post("/api/session", json={"token": "t"})

    assert resp.status_code == 400
    assert "missing" in resp.get_json()["error"]


def test_non_json_body_rejected(client):
    resp = client.post("/api/session", data="token=t", content_type="text/plain")

    assert resp.status_code == 400


def test_corrupted_session_reads_as_logged_out(client):
    with client.session_transaction() as sess:
        sess["user"] = "tampered"

    resp = client.get("/api/session")

    assert resp.status_code == 200
    assert resp.get_json() == {"user": None}


def test_security_headers(client):
    resp = client.get("/api/session")

    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"


def test_requests_do_not_add_session_listeners(client):
    topic = pub.getDefaultTopicMgr().getTopic(SESSION_CHANGED_TOPIC)
    gc.disable()
    try:
        for _ in range(20):
            client.post("/api/session", json=RECORD)
            client.delete("/api/session")
        count = topic.getNumListeners()
    finally:
        gc.enable()

    assert count == 1


def test_missing_session_secret_warns_once(monkeypatch, caplog):
    monkeypatch.setenv("SECRET_KEY", "cookie-signing-key")

    with caplog.at_level(logging.WARNING):
        client = create_app().test_client()
        for _ in range(5):
            client.post("/api/session", json=RECORD)
            client.get("/api/session")

    warnings = [m for m in caplog.messages if "SESSION_SECRET is not set" in m]
    assert len(warnings) == 1
    assert client.get("/api/session").get_json() == {"user": RECORD}
