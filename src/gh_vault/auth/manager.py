"""
Authentication manager for gh-vault.
Runs the login, logout and status flows on top of the credential store.
"""

from dataclasses import dataclass
from typing import Any, Optional

import structlog

from .base import AuthenticationError, TokenInfo, TokenValidation
from .policy import check_token
from .validator import classify
from ..stores.base import StorageLocation
from ..stores.manager import CredentialStore

logger = structlog.get_logger(__name__)


@dataclass
class LoginResult:
    """Outcome of a successful login."""
    validation: TokenValidation
    location: StorageLocation
    info: Optional[TokenInfo] = None


@dataclass
class StatusResult:
    """Current authentication state."""
    validation: TokenValidation
    location: StorageLocation
    info: Optional[TokenInfo] = None


class AuthManager:
    """Manager for the stored GitHub token."""

    def __init__(self, store: CredentialStore, http_client: Any = None):
        """
        Initialize authentication manager.

        Args:
            store: Credential store holding the token
            http_client: Client with ``verify_token``; verification is skipped
                when None
        """
        self.store = store
        self.http_client = http_client

    async def _verify(self, token: str, verify: bool) -> Optional[TokenInfo]:
        if not verify or self.http_client is None:
            return None
        return await self.http_client.verify_token(token)

    async def login(
        self,
        token: str,
        skip_vault: bool = False,
        verify: bool = True,
    ) -> LoginResult:
        """
        Validate and store a token.

        Format and policy checks run before any network or storage I/O.

        Args:
            token: Token to store
            skip_vault: Store in the plain-text file instead of the vault
            verify: Check the token against GitHub before storing it

        Returns:
            LoginResult

        Raises:
            InvalidTokenFormatError: If the token matches no known shape
            PolicyRejectedError: If the token type is not allowed
            TokenVerificationError: If GitHub rejects the token
            StoreError: If the target tier cannot be written
        """
        validation = check_token(token)
        info = await self._verify(token, verify)
        location = await self.store.set(token, skip_vault=skip_vault)

        logger.info(
            "Login completed",
            token_type=validation.type.value,
            location=location.value,
        )
        return LoginResult(validation=validation, location=location, info=info)

    async def logout(self) -> None:
        """Remove the stored token from every tier."""
        await self.store.delete()
        logger.info("Logout completed")

    async def require_token(self) -> str:
        """
        Get the stored token for an authenticated request.

        Raises:
            AuthenticationError: If no token is stored
        """
        token = await self.store.get()
        if token is None:
            raise AuthenticationError()
        return token

    async def status(self, verify: bool = True) -> StatusResult:
        """
        Describe the stored token.

        Args:
            verify: Check the token against GitHub

        Raises:
            AuthenticationError: If no token is stored
            TokenVerificationError: If GitHub rejects the token
        """
        token = await self.require_token()
        location = await self.store.locate()
        info = await self._verify(token, verify)
        return StatusResult(validation=classify(token), location=location, info=info)
