"""Credential verification and token issuance."""

import base64
import hmac
from abc import ABC, abstractmethod
from typing import Optional


def encode_basic_token(username: str, password: str) -> str:
    """Encode ``username:password`` as base64, the Basic credential format.

    This is an encoding, not a secret: anyone holding the token can decode it.
    """
    raw = f"{username}:{password}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


class CredentialVerifier(ABC):
    """Decides whether a username/password pair may log in."""

    @abstractmethod
    def verify(self, username: str, password: str) -> Optional[str]:
        """
        Check a credential pair.

        Args:
            username: Login name as typed
            password: Password as typed

        Returns:
            An opaque token on success, None on mismatch
        """
        pass


class StaticCredentialVerifier(CredentialVerifier):
    """Accepts a single configured username/password pair."""

    def __init__(self, username: str, password: str) -> None:
        self._username = username
        self._password = password

    def verify(self, username: str, password: str) -> Optional[str]:
        user_ok = hmac.compare_digest(username.encode("utf-8"), self._username.encode("utf-8"))
        pass_ok = hmac.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))
        if user_ok and pass_ok:
            return encode_basic_token(username, password)
        return None
