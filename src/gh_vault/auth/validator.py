"""
Token format classification. Pure functions, no I/O.
"""

import re

from .base import TokenType, TokenValidation

CLASSIC_TOKEN_PATTERN = re.compile(r"ghp_[A-Za-z0-9]{36}")
FINE_GRAINED_TOKEN_PATTERN = re.compile(r"github_pat_[A-Za-z0-9_]{22,}")


def classify(token: str) -> TokenValidation:
    """
    Classify a token string by its shape.

    Args:
        token: Candidate token

    Returns:
        TokenValidation; ``valid`` is False and ``type`` UNKNOWN for anything
        that is neither a classic nor a fine-grained PAT
    """
    if isinstance(token, str):
        if CLASSIC_TOKEN_PATTERN.fullmatch(token):
            return TokenValidation(valid=True, type=TokenType.CLASSIC)
        if FINE_GRAINED_TOKEN_PATTERN.fullmatch(token):
            return TokenValidation(valid=True, type=TokenType.FINE_GRAINED)

    return TokenValidation(valid=False, type=TokenType.UNKNOWN)
