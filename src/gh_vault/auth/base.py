"""
Authentication types and errors.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class TokenType(Enum):
    """GitHub personal access token type."""
    CLASSIC = "classic"
    FINE_GRAINED = "fine-grained"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class TokenValidation:
    """Result of classifying a token string."""
    valid: bool
    type: TokenType


@dataclass
class TokenInfo:
    """Account details GitHub reports for a token."""
    login: str
    scopes: List[str] = field(default_factory=list)
    rate_limit_remaining: int = 0
    rate_limit_limit: int = 0

    def describe_scopes(self) -> str:
        """Scopes as shown to users; fine-grained tokens report none."""
        return ", ".join(self.scopes) or "(fine-grained PAT)"


class AuthError(Exception):
    """Base exception for authentication errors."""
    pass


class AuthenticationError(AuthError):
    """No GitHub token is configured."""

    def __init__(self, message: str = "GitHub token not configured."):
        super().__init__(message)


class InvalidTokenFormatError(AuthError):
    """Token does not match any known GitHub token shape."""

    def __init__(
        self,
        message: str = (
            "Invalid token format. Expected: github_pat_... "
            "(fine-grained personal access token)"
        ),
    ):
        super().__init__(message)


class PolicyRejectedError(AuthError):
    """Token is well-formed but its type is not allowed."""

    def __init__(self, token_type: TokenType, message: str = ""):
        self.token_type = token_type
        if not message:
            if token_type is TokenType.CLASSIC:
                message = "Classic personal access tokens (ghp_*) are not supported."
            else:
                message = f"Tokens of type '{token_type.value}' are not supported."
        super().__init__(message)


class TokenDisplayDisabledError(AuthError):
    """Printing the stored token is refused."""

    def __init__(self, message: str = "Token display is disabled for security."):
        super().__init__(message)


class TokenVerificationError(AuthError):
    """GitHub rejected the token or could not be reached to check it."""

    def __init__(self, message: str, status_code: int = 0):
        self.status_code = status_code
        super().__init__(message)
