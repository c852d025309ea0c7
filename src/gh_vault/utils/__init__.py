"""Utility helpers for gh-vault."""

from .http_client import GitHubClient

__all__ = ["GitHubClient"]
