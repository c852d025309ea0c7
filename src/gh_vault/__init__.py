"""
gh-vault: credential vault for a GitHub command-line tool.
"""

from .version import __version__

__all__ = ["__version__"]
