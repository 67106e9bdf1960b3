"""
Tests for password hashing, password rules and the session store
"""

import time

from jose import jwt

from tuca.core.passwords import get_password_hash, validate_password_strength, verify_password
from tuca.core.sessions import SESSION_SECRET, SessionStore, sign_session_id, unsign_session_id


def test_password_hashing():
    hashed = get_password_hash("island-breeze-42")
    assert hashed != "island-breeze-42"
    assert verify_password("island-breeze-42", hashed)
    assert not verify_password("island-breeze-43", hashed)


def test_malformed_hash_does_not_raise():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_password_rules():
    weak = validate_password_strength("short")
    assert not weak["is_valid"]
    assert "Password must be at least 8 characters" in weak["errors"]

    ok = validate_password_strength("island-breeze-42")
    assert ok["is_valid"]
    assert ok["errors"] == []
    assert ok["strength_score"] > weak["strength_score"]


def test_strength_score_is_capped():
    assert validate_password_strength("Aa1!" * 20)["strength_score"] == 100


def test_password_longer_than_bcrypt_limit_is_rejected():
    result = validate_password_strength("é" * 40)
    assert not result["is_valid"]
    assert "Password must be at most 72 bytes" in result["errors"]


def test_session_lifecycle():
    store = SessionStore(max_age=60, prune_interval=3600)
    session_id = store.create(7)
    assert store.get_user_id(session_id) == 7
    assert len(store) == 1

    store.destroy(session_id)
    assert store.get_user_id(session_id) is None
    store.destroy(session_id)


def test_expired_session_is_dropped():
    store = SessionStore(max_age=-1, prune_interval=3600)
    session_id = store.create(7)
    assert store.get_user_id(session_id) is None
    assert len(store) == 0


def test_prune_removes_only_expired_sessions():
    store = SessionStore(max_age=60, prune_interval=3600)
    fresh = store.create(1)
    stale = store.create(2)
    store._sessions[stale].expires_at = time.time() - 1

    assert store.prune() == 1
    assert store.get_user_id(fresh) == 1
    assert len(store) == 1


def test_destroy_user_sessions():
    store = SessionStore(max_age=60, prune_interval=3600)
    store.create(1)
    store.create(1)
    keep = store.create(2)
    assert store.destroy_user_sessions(1) == 2
    assert store.get_user_id(keep) == 2


def test_session_ids_are_unique():
    store = SessionStore()
    assert len({store.create(1) for _ in range(50)}) == 50


def test_signed_session_ids():
    signed = sign_session_id("abc")
    assert signed != "abc"
    assert unsign_session_id(signed) == "abc"
    assert unsign_session_id(jwt.encode({"sid": "abc", "type": "session"}, "other-secret", algorithm="HS256")) is None
    assert unsign_session_id(jwt.encode({"sid": "abc", "type": "reset"}, SESSION_SECRET, algorithm="HS256")) is None
    assert unsign_session_id("abc") is None
