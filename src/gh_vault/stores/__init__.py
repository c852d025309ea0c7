"""
Storage module for gh-vault.
Provides the vault and file tiers and the credential store combining them.
"""

from .base import (
    BaseStore,
    FileWriteError,
    StorageLocation,
    StoreError,
    VaultUnavailableError,
    VaultWriteError,
)
from .file_store import FileStore
from .keyring_store import KeyringStore
from .manager import CredentialStore, create_credential_store

__all__ = [
    "BaseStore",
    "StoreError",
    "VaultUnavailableError",
    "VaultWriteError",
    "FileWriteError",
    "StorageLocation",
    "FileStore",
    "KeyringStore",
    "CredentialStore",
    "create_credential_store",
]
