"""Tests for the session manager."""

import pytest

from bookshelf.core.auth import SessionManager, StaticCredentialVerifier, encode_basic_token
from bookshelf.core.auth.session import (
    DEFAULT_CREDENTIAL_KEY,
    LOGIN_ERROR,
    LOGIN_INVALID,
    LOGIN_SUCCESS,
    Session,
)
from bookshelf.core.auth.verifier import CredentialVerifier
from bookshelf.core.storage import KeyValueStorage, MemoryStorage, StorageError


class BrokenStorage(KeyValueStorage):
    """Storage whose every operation fails."""

    def get(self, key):
        raise StorageError("storage unavailable")

    def set(self, key, value):
        raise StorageError("storage unavailable")

    def delete(self, key):
        raise StorageError("storage unavailable")


class ExplodingVerifier(CredentialVerifier):
    def verify(self, username, password):
        raise RuntimeError("verifier crashed")


def test_starts_unauthenticated(session_manager):
    """A fresh manager holds no token."""
    assert session_manager.token is None
    assert session_manager.is_authenticated is False
    assert session_manager.status_message is None


def test_login_with_valid_credentials(session_manager, storage):
    """admin/1234 logs in and persists the encoded token."""
    assert session_manager.login("admin", "1234") is True
    assert session_manager.is_authenticated
    assert session_manager.token == "YWRtaW46MTIzNA=="
    assert session_manager.status_message == LOGIN_SUCCESS
    assert storage.get(DEFAULT_CREDENTIAL_KEY) == "YWRtaW46MTIzNA=="


@pytest.mark.parametrize(
    "username,password",
    [("admin", "wrong"), ("root", "1234"), ("", ""), ("Admin", "1234")],
)
def test_login_with_invalid_credentials(session_manager, storage, username, password):
    """Any other pair is rejected without touching the session."""
    assert session_manager.login(username, password) is False
    assert session_manager.is_authenticated is False
    assert session_manager.status_message == LOGIN_INVALID
    assert DEFAULT_CREDENTIAL_KEY not in storage


def test_failed_login_keeps_existing_session(session_manager):
    """A rejected attempt leaves an authenticated session authenticated."""
    session_manager.login("admin", "1234")
    assert session_manager.login("admin", "nope") is False
    assert session_manager.is_authenticated
    assert session_manager.token == encode_basic_token("admin", "1234")


def test_login_fault_returns_false(storage):
    """An exception inside verification is reported, not raised."""
    manager = SessionManager(storage, ExplodingVerifier())
    assert manager.login("admin", "1234") is False
    assert manager.is_authenticated is False
    assert manager.status_message == LOGIN_ERROR


@pytest.mark.parametrize("token", ["abc", "YWRtaW46MTIzNA==", "x" * 512])
def test_credential_survives_new_manager(storage, token):
    """A token set on one manager is restored by another on the same storage."""
    verifier = StaticCredentialVerifier("admin", "1234")
    SessionManager(storage, verifier).set_credential(token)

    restored = SessionManager(storage, verifier)
    restored.load_credential()
    assert restored.is_authenticated
    assert restored.token == token


def test_load_without_stored_token(session_manager):
    """Nothing persisted means nothing changes."""
    session_manager.load_credential()
    assert session_manager.is_authenticated is False


def test_load_with_broken_storage_is_absence():
    """A storage read failure starts the session unauthenticated."""
    manager = SessionManager(BrokenStorage(), StaticCredentialVerifier("admin", "1234"))
    manager.load_credential()
    assert manager.is_authenticated is False


def test_set_credential_with_broken_storage_keeps_memory_state():
    """Persistence is best effort; the in-memory session still changes."""
    manager = SessionManager(BrokenStorage(), StaticCredentialVerifier("admin", "1234"))
    manager.set_credential("token")
    assert manager.is_authenticated
    assert manager.login("admin", "1234") is True


def test_empty_token_clears_storage(session_manager, storage):
    """An empty token counts as no token and removes the persisted one."""
    session_manager.set_credential("abc")
    session_manager.set_credential("")
    assert session_manager.token is None
    assert session_manager.is_authenticated is False
    assert DEFAULT_CREDENTIAL_KEY not in storage


def test_logout_clears_everything(session_manager, storage):
    """Logout drops the token in memory and in storage."""
    session_manager.login("admin", "1234")
    session_manager.logout()
    assert session_manager.is_authenticated is False
    assert session_manager.token is None
    assert storage.get(DEFAULT_CREDENTIAL_KEY) is None


def test_logout_is_idempotent(session_manager, storage):
    session_manager.logout()
    session_manager.logout()
    assert session_manager.is_authenticated is False
    assert DEFAULT_CREDENTIAL_KEY not in storage


def test_custom_credential_key():
    storage = MemoryStorage()
    manager = SessionManager(storage, StaticCredentialVerifier("admin", "1234"), credential_key="bookshelf_token")
    manager.login("admin", "1234")
    assert storage.get("bookshelf_token") == manager.token
    assert DEFAULT_CREDENTIAL_KEY not in storage


def test_session_snapshot(session_manager):
    """The snapshot derives ``authenticated`` from the token."""
    assert session_manager.session == Session()
    assert session_manager.session.authenticated is False

    session_manager.login("admin", "1234")
    snapshot = session_manager.session
    assert snapshot.authenticated is True
    assert snapshot.token == session_manager.token
    assert snapshot.status_message == LOGIN_SUCCESS


def test_encode_basic_token():
    assert encode_basic_token("admin", "1234") == "YWRtaW46MTIzNA=="
    assert encode_basic_token("josé", "ñ") == "am9zw6k6w7E="
