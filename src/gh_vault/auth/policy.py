"""
Token acceptance policy.
"""

from .base import InvalidTokenFormatError, PolicyRejectedError, TokenType, TokenValidation
from .validator import classify

# Classic tokens carry broad scopes that cannot be limited per repository
ALLOWED_TOKEN_TYPES = frozenset({TokenType.FINE_GRAINED})


def is_allowed(token_type: TokenType) -> bool:
    """Return True if tokens of this type may be stored."""
    return token_type in ALLOWED_TOKEN_TYPES


def check_token(token: str) -> TokenValidation:
    """
    Classify a token and enforce the policy on it.

    Args:
        token: Candidate token

    Returns:
        The token's TokenValidation

    Raises:
        InvalidTokenFormatError: If the token matches no known shape
        PolicyRejectedError: If the token type is not allowed
    """
    validation = classify(token)
    if not validation.valid:
        raise InvalidTokenFormatError()
    if not is_allowed(validation.type):
        raise PolicyRejectedError(validation.type)
    return validation
