"""Authentication module."""

from bookshelf.core.auth.session import Session, SessionManager
from bookshelf.core.auth.verifier import (
    CredentialVerifier,
    StaticCredentialVerifier,
    encode_basic_token,
)

__all__ = [
    "Session",
    "SessionManager",
    "CredentialVerifier",
    "StaticCredentialVerifier",
    "encode_basic_token",
]
