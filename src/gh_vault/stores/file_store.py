"""
File-based token storage implementation.
Fallback tier for environments without a usable platform vault
(CI runners, containers, headless Linux). The token is stored as plain
text in a single owner-only file.
"""

import os
import secrets
import stat
from pathlib import Path
from typing import Optional, Union

import aiofiles
import aiofiles.os
import structlog

from .base import (
    BaseStore,
    FileWriteError,
    StorageLocation,
    StoreError,
    TokenNotFoundError,
)

logger = structlog.get_logger(__name__)

DIR_MODE = 0o700
FILE_MODE = 0o600


def _private_opener(path: str, flags: int) -> int:
    """Open a new file that is owner read/write from the moment it exists."""
    return os.open(path, flags | os.O_EXCL, FILE_MODE)


class FileStore(BaseStore):
    """Single-file token storage."""

    location = StorageLocation.FILE

    def __init__(self, path: Union[str, Path]):
        """
        Initialize file store.

        Args:
            path: Token file location
        """
        self.path = Path(path).expanduser()

    async def _read(self) -> str:
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError as e:
            raise TokenNotFoundError(f"No token file at {self.path}") from e
        except UnicodeDecodeError as e:
            raise StoreError(f"Token file {self.path} is not valid UTF-8") from e
        except OSError as e:
            raise StoreError(f"Failed to read token file {self.path}: {e}") from e

        token = content.strip()
        if not token:
            raise TokenNotFoundError(f"Token file {self.path} is empty")
        return token

    async def _warn_if_exposed(self) -> None:
        if os.name != "posix":
            return
        try:
            st = await aiofiles.os.stat(self.path)
        except OSError:
            return
        if stat.S_IMODE(st.st_mode) & 0o077:
            logger.warning(
                "Token file is accessible by other users",
                path=str(self.path),
                mode=oct(stat.S_IMODE(st.st_mode)),
            )

    async def get_token(self) -> Optional[str]:
        """
        Get token from the token file.

        Returns:
            The file content with surrounding whitespace removed, or None if
            the file is missing or blank
        """
        try:
            token = await self._read()
        except TokenNotFoundError:
            return None

        await self._warn_if_exposed()
        return token

    async def save_token(self, token: str) -> None:
        """
        Save token to the token file.

        The token is written to a temporary sibling created with mode 0600 and
        then renamed over the target, so the file is never visible with wider
        permissions or partially written.

        Raises:
            FileWriteError: If the file could not be written
        """
        tmp_path = self.path.with_name(
            f".{self.path.name}.{secrets.token_hex(8)}.tmp"
        )
        try:
            await aiofiles.os.makedirs(self.path.parent, mode=DIR_MODE, exist_ok=True)
            async with aiofiles.open(
                tmp_path, "w", encoding="utf-8", opener=_private_opener
            ) as f:
                await f.write(f"{token}\n")
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as e:
            if await aiofiles.os.path.exists(tmp_path):
                await aiofiles.os.remove(tmp_path)
            raise FileWriteError(f"Failed to write token file {self.path}: {e}") from e

        logger.debug("Token stored in file", path=str(self.path))

    async def delete_token(self) -> bool:
        """
        Delete the token file.

        Returns:
            True if the file was deleted, False if it did not exist
        """
        try:
            await aiofiles.os.remove(self.path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StoreError(f"Failed to delete token file {self.path}: {e}") from e

        logger.debug("Token file removed", path=str(self.path))
        return True
