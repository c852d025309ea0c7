"""
HTTP client utilities for gh-vault.
Provides an async GitHub API client with retry logic, used to verify tokens
before they are stored.
"""

import asyncio
from typing import Any, Dict, Optional

import httpx
from httpx import AsyncClient, Timeout
import structlog

from ..version import __version__
from ..auth.base import TokenInfo, TokenVerificationError

logger = structlog.get_logger(__name__)

USER_AGENT = f"gh-vault/{__version__}"
RETRY_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


def parse_header_number(value: Optional[str], default: int = 0) -> int:
    """Parse an integer response header, falling back to ``default``."""
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


class GitHubClient:
    """Async GitHub REST client with retry logic."""

    def __init__(
        self,
        config: Any,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize GitHub client.

        Args:
            config: Application configuration
            timeout: Request timeout in seconds
            max_retries: Maximum number of retries
            retry_delay: Base delay between retries in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self.base_url = getattr(config, "api_url", "https://api.github.com")
        self.timeout = timeout if timeout is not None else getattr(config, "request_timeout", 30.0)
        self.max_retries = max_retries if max_retries is not None else getattr(config, "request_retry", 3)
        self.retry_delay = retry_delay
        self.client = self._create_client(transport)

    def _create_client(self, transport: Optional[httpx.AsyncBaseTransport]) -> AsyncClient:
        """Create HTTP client with configured settings."""
        client_kwargs: Dict[str, Any] = {}
        if transport is not None:
            client_kwargs["transport"] = transport

        return AsyncClient(
            base_url=self.base_url,
            timeout=Timeout(connect=5.0, read=self.timeout, write=self.timeout, pool=5.0),
            headers={
                "User-Agent": USER_AGENT,
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            **client_kwargs,
        )

    async def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """
        Make HTTP request with retry logic.

        Args:
            method: HTTP method
            url: URL to request, relative to the API base URL
            **kwargs: Additional arguments for httpx

        Returns:
            HTTP response
        """
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.request(method, url, **kwargs)
            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt >= self.max_retries:
                    logger.error(
                        "Network error after all retries",
                        method=method,
                        url=url,
                        error=str(e),
                        max_attempts=self.max_retries + 1,
                    )
                    raise
                delay = self.retry_delay * (2 ** attempt)
                logger.warning(
                    "Network error, retrying",
                    method=method,
                    url=url,
                    error=str(e),
                    attempt=attempt + 1,
                    delay=delay,
                )
                await asyncio.sleep(delay)
                continue

            if response.status_code in RETRY_STATUS_CODES and attempt < self.max_retries:
                delay = self.retry_delay * (2 ** attempt)
                logger.warning(
                    "Request failed, retrying",
                    method=method,
                    url=url,
                    status_code=response.status_code,
                    attempt=attempt + 1,
                    delay=delay,
                )
                await asyncio.sleep(delay)
                continue

            logger.debug(
                "HTTP request completed",
                method=method,
                url=url,
                status_code=response.status_code,
                attempt=attempt + 1,
            )
            return response

        raise RuntimeError("HTTP request failed without exception")

    async def verify_token(self, token: str) -> TokenInfo:
        """
        Verify a token against the GitHub API.

        Args:
            token: Token to verify

        Returns:
            TokenInfo for the token's account

        Raises:
            TokenVerificationError: If GitHub rejects the token or is unreachable
        """
        try:
            response = await self.request(
                "GET", "/user", headers={"Authorization": f"Bearer {token}"}
            )
        except httpx.HTTPError as e:
            raise TokenVerificationError(f"Could not reach GitHub: {e}") from e

        if response.status_code == 401:
            raise TokenVerificationError(
                "Token was rejected by GitHub (bad credentials).", status_code=401
            )
        if response.status_code >= 400:
            raise TokenVerificationError(
                f"GitHub returned HTTP {response.status_code} while verifying the token.",
                status_code=response.status_code,
            )

        scopes_header = response.headers.get("x-oauth-scopes", "")
        scopes = [s.strip() for s in scopes_header.split(",") if s.strip()]
        return TokenInfo(
            login=response.json().get("login", ""),
            scopes=scopes,
            rate_limit_remaining=parse_header_number(response.headers.get("x-ratelimit-remaining")),
            rate_limit_limit=parse_header_number(response.headers.get("x-ratelimit-limit")),
        )

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
