from tuca.core.logging_config import redact_sensitive_fields


def test_redact_sensitive_keys():
    event = {"event": "login", "password": "island-breeze-42", "user_id": 3}
    out = redact_sensitive_fields(None, None, event.copy())
    assert out["password"] == "REDACTED"
    assert out["user_id"] == 3


def test_redact_session_cookie_in_header():
    event = {"headers": {"cookie-line": "theme=dark; tuca.sid=eyJhbGciOi.payload.sig; lang=pt"}}
    out = redact_sensitive_fields(None, None, event.copy())
    line = out["headers"]["cookie-line"]
    assert "tuca.sid=REDACTED" in line
    assert "eyJhbGciOi" not in line
    assert "theme=dark" in line


def test_redact_bearer_token_in_list():
    event = {"lines": ["Authorization: Bearer abc.def.ghi", "ok"]}
    out = redact_sensitive_fields(None, None, event.copy())
    assert out["lines"] == ["Authorization: Bearer REDACTED", "ok"]


def test_redact_nested():
    event = {"payload": {"new_password": "secret", "items": [{"token": "abc"}]}}
    out = redact_sensitive_fields(None, None, event.copy())
    assert out["payload"]["new_password"] == "REDACTED"
    assert out["payload"]["items"][0]["token"] == "REDACTED"
