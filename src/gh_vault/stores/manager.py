"""
Credential store for gh-vault.
Combines the platform vault and the fallback token file behind one
read/write/delete interface and keeps at most one tier holding the token.
"""

from typing import Any, Optional

import structlog

from .base import BaseStore, StorageLocation, StoreError, VaultUnavailableError, VaultWriteError
from .file_store import FileStore
from .keyring_store import KeyringStore

logger = structlog.get_logger(__name__)

INSECURE_STORAGE_HINT = (
    "No secure vault is available to store the token. "
    "Retry with --insecure-storage to save it in a plain-text file instead."
)


class CredentialStore:
    """Two-tier token store with vault precedence."""

    def __init__(self, vault: BaseStore, file_store: BaseStore):
        """
        Initialize credential store.

        Args:
            vault: Platform vault tier
            file_store: Plain-text file tier
        """
        self.vault = vault
        self.file_store = file_store

    async def _get_from_vault(self) -> Optional[str]:
        try:
            return await self.vault.get_token()
        except VaultUnavailableError as e:
            logger.debug("Vault unavailable, falling back to token file", error=str(e))
            return None

    async def get(self) -> Optional[str]:
        """
        Get the stored token.

        The vault is consulted first so a stale file copy never shadows a
        vault entry.

        Returns:
            The token, or None if neither tier holds one
        """
        token = await self._get_from_vault()
        if token is not None:
            return token
        return await self.file_store.get_token()

    async def locate(self) -> StorageLocation:
        """
        Report which tier currently serves ``get()``.

        Returns:
            StorageLocation of the live token
        """
        if await self._get_from_vault() is not None:
            return self.vault.location
        if await self.file_store.has_token():
            return self.file_store.location
        return StorageLocation.NONE

    async def set(self, token: str, skip_vault: bool = False) -> StorageLocation:
        """
        Store the token in exactly one tier.

        Args:
            token: Token to store
            skip_vault: Store in the plain-text file instead of the vault

        Returns:
            StorageLocation the token was written to

        Raises:
            VaultWriteError: If the vault write fails (skip_vault=False)
            FileWriteError: If the file write fails (skip_vault=True)
        """
        if skip_vault:
            await self._discard(self.vault)
            await self.file_store.save_token(token)
            logger.info("Token stored in file tier")
            return self.file_store.location

        try:
            await self.vault.save_token(token)
        except VaultUnavailableError as e:
            raise VaultWriteError(f"{INSECURE_STORAGE_HINT} ({e})") from e

        await self._discard(self.file_store)
        logger.info("Token stored in vault tier")
        return self.vault.location

    async def delete(self) -> None:
        """
        Remove the token from both tiers.

        Missing entries are not errors and failures of either tier are only
        logged, so this is safe to call when nothing is stored.
        """
        await self._discard(self.vault)
        await self._discard(self.file_store)

    async def _discard(self, store: BaseStore) -> None:
        """Best-effort removal of the token from one tier."""
        try:
            deleted = await store.delete_token()
        except StoreError as e:
            logger.warning(
                "Failed to remove token",
                tier=store.location.value,
                error=str(e),
            )
            return

        if deleted:
            logger.debug("Removed token", tier=store.location.value)


def create_credential_store(config: Any, keyring_backend: Optional[Any] = None) -> CredentialStore:
    """
    Create the credential store for this process.

    Args:
        config: Application configuration
        keyring_backend: Optional keyring backend overriding platform detection

    Returns:
        CredentialStore instance
    """
    return CredentialStore(
        vault=KeyringStore(keyring_backend),
        file_store=FileStore(config.token_file),
    )
