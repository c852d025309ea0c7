"""
Authentication module for gh-vault.
Token classification, acceptance policy and the login/logout flows.
"""

from .base import (
    AuthError,
    AuthenticationError,
    InvalidTokenFormatError,
    PolicyRejectedError,
    TokenDisplayDisabledError,
    TokenInfo,
    TokenType,
    TokenValidation,
    TokenVerificationError,
)
from .manager import AuthManager, LoginResult, StatusResult
from .policy import ALLOWED_TOKEN_TYPES, check_token, is_allowed
from .validator import classify

__all__ = [
    "AuthError",
    "AuthenticationError",
    "InvalidTokenFormatError",
    "PolicyRejectedError",
    "TokenDisplayDisabledError",
    "TokenVerificationError",
    "TokenInfo",
    "TokenType",
    "TokenValidation",
    "AuthManager",
    "LoginResult",
    "StatusResult",
    "ALLOWED_TOKEN_TYPES",
    "check_token",
    "is_allowed",
    "classify",
]
