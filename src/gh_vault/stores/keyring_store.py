"""
Platform vault token storage implementation.
Stores the token in the OS secret store through the keyring library
(macOS Keychain, Windows Credential Manager, freedesktop Secret Service).
"""

import asyncio
from typing import Any, Optional

import keyring
from keyring.errors import PasswordDeleteError
import structlog

from .base import (
    BaseStore,
    StorageLocation,
    TokenNotFoundError,
    VaultUnavailableError,
    VaultWriteError,
)

logger = structlog.get_logger(__name__)

# Fixed entry identity so lookups are deterministic across invocations
KEYRING_SERVICE = "gh-vault"
KEYRING_ACCOUNT = "github-token"


class KeyringStore(BaseStore):
    """Token storage in the platform secret store."""

    location = StorageLocation.VAULT

    def __init__(self, backend: Optional[Any] = None):
        """
        Initialize keyring store.

        Args:
            backend: keyring backend to use. Defaults to the backend keyring
                selects for this platform, resolved once here.
        """
        self._init_error: Optional[Exception] = None
        if backend is None:
            try:
                backend = keyring.get_keyring()
            except Exception as e:
                self._init_error = e
        self._backend = backend

    @property
    def backend_name(self) -> str:
        """Human-readable name of the selected backend."""
        if self._backend is None:
            return "no keyring backend"
        return getattr(self._backend, "name", type(self._backend).__name__)

    def is_usable(self) -> bool:
        """
        Check whether the selected backend can actually store secrets.

        keyring falls back to its ``fail`` (priority 0) or ``null``
        (priority -1) backends when no secret service is reachable.
        """
        if self._backend is None:
            return False
        try:
            priority = type(self._backend).priority
        except Exception:
            return False
        return priority >= 1

    def _require_backend(self, error_cls: type = VaultUnavailableError) -> Any:
        if not self.is_usable():
            reason = f": {self._init_error}" if self._init_error else ""
            raise error_cls(
                f"No usable system keyring ({self.backend_name}){reason}"
            )
        return self._backend

    async def get_token(self) -> Optional[str]:
        """
        Get token from the platform vault.

        Returns:
            The stored token, or None if no entry exists

        Raises:
            VaultUnavailableError: If the vault cannot be queried
        """
        backend = self._require_backend()
        try:
            token = await asyncio.to_thread(
                backend.get_password, KEYRING_SERVICE, KEYRING_ACCOUNT
            )
        except Exception as e:
            raise VaultUnavailableError(
                f"Failed to read token from {self.backend_name}: {e}"
            ) from e

        if not token:
            return None
        return token

    async def save_token(self, token: str) -> None:
        """
        Save token to the platform vault, replacing any existing entry.

        The entry is read back after writing so that backends which accept
        writes without persisting them are reported as failures.

        Raises:
            VaultWriteError: If the token could not be stored
        """
        backend = self._require_backend(VaultWriteError)
        try:
            await asyncio.to_thread(
                backend.set_password, KEYRING_SERVICE, KEYRING_ACCOUNT, token
            )
            stored = await asyncio.to_thread(
                backend.get_password, KEYRING_SERVICE, KEYRING_ACCOUNT
            )
        except Exception as e:
            raise VaultWriteError(
                f"Failed to store token in {self.backend_name}: {e}"
            ) from e

        if stored != token:
            raise VaultWriteError(f"{self.backend_name} did not persist the token")

        logger.debug("Token stored in vault", backend=self.backend_name)

    async def delete_token(self) -> bool:
        """
        Delete token from the platform vault.

        Returns:
            True if an entry was removed, False if none existed

        Raises:
            VaultUnavailableError: If the vault failed for any other reason
        """
        backend = self._require_backend()
        try:
            await asyncio.to_thread(self._delete, backend)
        except TokenNotFoundError:
            return False

        logger.debug("Token removed from vault", backend=self.backend_name)
        return True

    def _delete(self, backend: Any) -> None:
        try:
            backend.delete_password(KEYRING_SERVICE, KEYRING_ACCOUNT)
        except PasswordDeleteError as e:
            # Confirm absence through the explicit None sentinel of get_password
            try:
                existing = backend.get_password(KEYRING_SERVICE, KEYRING_ACCOUNT)
            except Exception as probe_error:
                raise VaultUnavailableError(
                    f"Failed to delete token from {self.backend_name}: {probe_error}"
                ) from e
            if existing is None:
                raise TokenNotFoundError("No token in vault") from e
            raise VaultUnavailableError(
                f"Failed to delete token from {self.backend_name}: {e}"
            ) from e
        except Exception as e:
            raise VaultUnavailableError(
                f"Failed to delete token from {self.backend_name}: {e}"
            ) from e
