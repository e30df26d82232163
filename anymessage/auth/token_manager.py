# anymessage/auth/token_manager.py
import secrets
import hashlib
from abc import ABC, abstractmethod
from typing import Tuple

from ..settings import settings


class UserTokenManagerProtocol(ABC):
    """Protocol defining the interface for user token management operations."""

    @abstractmethod
    def generate_token_and_hash(self) -> Tuple[str, str]:
        """Generate a new token and return both the raw token and its hash."""
        pass

    @abstractmethod
    def hash_token(self, token: str) -> str:
        """Create a secure hash of the provided token."""
        pass


class DefaultUserTokenManager(UserTokenManagerProtocol):
    """Token management using secure random generation and SHA-256 hashing."""

    def generate_token_and_hash(self) -> Tuple[str, str]:
        """
        Generate a cryptographically secure token and its corresponding hash.

        Returns:
            Tuple containing the raw token (for client use) and its hash (for storage).
        """
        token = secrets.token_urlsafe(settings.user_auth_token_bytes_length)
        return token, self.hash_token(token)

    def hash_token(self, token: str) -> str:
        """Raw tokens are never stored; only their SHA-256 hashes are persisted."""
        return hashlib.sha256(token.encode('utf-8')).hexdigest()
