"""
Base storage interface for the credential tiers.
"""

import abc
from enum import Enum
from typing import Optional


class StoreError(Exception):
    """Base exception for store errors."""
    pass


class TokenNotFoundError(StoreError):
    """Token not found in store.

    Raised by backend internals only; public store methods turn it into
    ``None`` (reads) or ``False`` (deletes).
    """
    pass


class VaultUnavailableError(StoreError):
    """The platform secret store is unreachable, unsupported or refused access."""
    pass


class VaultWriteError(VaultUnavailableError):
    """Writing to the platform secret store failed."""
    pass


class FileWriteError(StoreError):
    """Writing the fallback token file failed."""
    pass


class StorageLocation(Enum):
    """Which tier currently holds the live token."""
    VAULT = "vault"
    FILE = "file"
    NONE = "none"


class BaseStore(abc.ABC):
    """Base class for a single-token storage tier."""

    location: StorageLocation = StorageLocation.NONE

    @abc.abstractmethod
    async def get_token(self) -> Optional[str]:
        """
        Get token from store.

        Returns:
            The stored token, or None if nothing is stored
        """
        pass

    @abc.abstractmethod
    async def save_token(self, token: str) -> None:
        """
        Save token to store, replacing any existing one.

        Args:
            token: Token to save
        """
        pass

    @abc.abstractmethod
    async def delete_token(self) -> bool:
        """
        Delete token from store.

        Returns:
            True if token was deleted, False if not found
        """
        pass

    async def has_token(self) -> bool:
        """Check whether the store currently holds a token."""
        return await self.get_token() is not None
