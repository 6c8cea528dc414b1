"""Authentication state and credential persistence."""

from dataclasses import dataclass
from typing import Optional

import structlog

from bookshelf.core.auth.verifier import CredentialVerifier
from bookshelf.core.storage import KeyValueStorage, StorageError

logger = structlog.get_logger(__name__)

DEFAULT_CREDENTIAL_KEY = "auth_token"

LOGIN_PENDING = "Signing in..."
LOGIN_SUCCESS = "Login successful"
LOGIN_INVALID = "Invalid credentials"
LOGIN_ERROR = "Login failed"


@dataclass(frozen=True)
class Session:
    """Snapshot of the authentication state."""
    token: Optional[str] = None
    status_message: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return bool(self.token)


class SessionManager:
    """Owns the session and mirrors the token into persistent storage.

    The manager is the only component that touches credential storage.
    Other components read ``token`` / ``is_authenticated`` and never write.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        verifier: CredentialVerifier,
        credential_key: str = DEFAULT_CREDENTIAL_KEY,
    ) -> None:
        self._storage = storage
        self._verifier = verifier
        self._credential_key = credential_key
        self._token: Optional[str] = None
        self._status_message: Optional[str] = None

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    @property
    def status_message(self) -> Optional[str]:
        return self._status_message

    @property
    def session(self) -> Session:
        return Session(token=self._token, status_message=self._status_message)

    def load_credential(self) -> None:
        """Restore a previously persisted token, if any."""
        try:
            stored = self._storage.get(self._credential_key)
        except StorageError as e:
            logger.warning("Credential load failed, starting unauthenticated", error=str(e))
            return
        if stored:
            self.set_credential(stored)
            logger.info("Credential restored from storage")

    def set_credential(self, token: Optional[str]) -> None:
        """Set the token and mirror it into storage (write or delete)."""
        self._token = token or None
        # No confirmation read-back; memory and storage may diverge until the next load
        try:
            if self._token:
                self._storage.set(self._credential_key, self._token)
            else:
                self._storage.delete(self._credential_key)
        except StorageError as e:
            logger.warning(
                "Credential persistence failed",
                authenticated=self.is_authenticated,
                error=str(e),
            )

    def login(self, username: str, password: str) -> bool:
        """
        Attempt to log in with a username/password pair.

        Returns:
            True when the verifier accepted the pair, False otherwise.
            Never raises; faults are reported through ``status_message``.
        """
        self._status_message = LOGIN_PENDING
        try:
            token = self._verifier.verify(username, password)
            if token:
                self.set_credential(token)
                self._status_message = LOGIN_SUCCESS
                logger.info("Login succeeded", username=username)
                return True
            self._status_message = LOGIN_INVALID
            logger.info("Login rejected", username=username)
            return False
        except Exception as e:
            logger.error("Login failed", username=username, error=str(e))
            self._status_message = LOGIN_ERROR
            return False

    def logout(self) -> None:
        """Clear the token from memory and storage."""
        self.set_credential(None)
        logger.info("Logged out")
