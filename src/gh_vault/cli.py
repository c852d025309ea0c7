"""
Command-line entry point for gh-vault.

Only this module formats errors and decides the exit code.
"""

import argparse
import asyncio
import getpass
import sys
from typing import Dict, List, Optional, Sequence, Type

import structlog

from .auth.base import (
    AuthenticationError,
    InvalidTokenFormatError,
    PolicyRejectedError,
    TokenDisplayDisabledError,
    TokenVerificationError,
)
from .auth.manager import AuthManager
from .config import VaultSettings, load_config
from .logging_config import configure_logging
from .stores.base import FileWriteError, StorageLocation
from .stores.manager import create_credential_store
from .utils.http_client import GitHubClient
from .version import __version__

logger = structlog.get_logger(__name__)

TOKEN_SETTINGS_URL = "https://github.com/settings/personal-access-tokens"

# Extra lines printed after the error message for known error types
CLI_ERROR_DETAILS: Dict[Type[Exception], List[str]] = {
    AuthenticationError: ["", "Run: gh-vault auth login"],
    InvalidTokenFormatError: [
        "",
        "Expected: github_pat_... (fine-grained personal access token)",
        "",
        f"Create a token at: {TOKEN_SETTINGS_URL}",
    ],
    PolicyRejectedError: [
        "",
        "Only fine-grained personal access tokens (github_pat_...) are accepted.",
        "",
        f"Create a token at: {TOKEN_SETTINGS_URL}",
    ],
    TokenDisplayDisabledError: [
        "",
        "Tokens in terminal output can leak to shell history and logs.",
        "",
        "To verify authentication: gh-vault auth status",
    ],
    TokenVerificationError: ["", "Check the token and your network, then retry."],
    FileWriteError: ["", "Check permissions on the token file and its directory."],
}


def print_error(message: str) -> None:
    print(message, file=sys.stderr)


def handle_error(error: Exception) -> None:
    """Format an error for the terminal. Does not choose the exit code."""
    print_error(f"Error: {error}")
    for line in CLI_ERROR_DETAILS.get(type(error), []):
        print_error(line)


def describe_location(location: StorageLocation, config: VaultSettings) -> str:
    if location is StorageLocation.VAULT:
        return "system keyring"
    if location is StorageLocation.FILE:
        return f"{config.token_file} (plain text, owner-only)"
    return "nowhere"


def read_token(with_token: bool) -> str:
    """Read a token from stdin or a hidden prompt."""
    if with_token:
        return sys.stdin.readline().strip()
    return getpass.getpass("Paste your GitHub token (input is hidden): ").strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gh-vault",
        description="Store a GitHub fine-grained token in the OS vault",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=str, help="Path to configuration file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)
    auth = commands.add_parser("auth", help="Manage GitHub authentication")
    auth_commands = auth.add_subparsers(dest="auth_command", required=True)

    login = auth_commands.add_parser("login", help="Authenticate with GitHub")
    login.add_argument(
        "--with-token",
        action="store_true",
        help="Read the token from standard input",
    )
    login.add_argument(
        "--insecure-storage",
        action="store_true",
        help="Save the token in a plain-text file instead of the system keyring",
    )
    login.add_argument(
        "--no-verify",
        action="store_true",
        help="Store the token without checking it against GitHub",
    )

    auth_commands.add_parser("logout", help="Remove stored GitHub credentials")

    status = auth_commands.add_parser("status", help="Show authentication status")
    status.add_argument(
        "--no-verify",
        action="store_true",
        help="Do not contact GitHub",
    )

    auth_commands.add_parser("token", help="Display auth token (disabled for security)")
    return parser


async def run_login(manager: AuthManager, args: argparse.Namespace, config: VaultSettings) -> int:
    token = read_token(args.with_token)
    if not token:
        print("Cancelled.")
        return 0

    result = await manager.login(
        token,
        skip_vault=args.insecure_storage,
        verify=not args.no_verify,
    )
    print(f"Token type: {result.validation.type.value}")
    if result.info is not None:
        print(f"✓ Valid for user: {result.info.login}")
        print(f"✓ Scopes: {result.info.describe_scopes()}")
        print(f"✓ Rate limit: {result.info.rate_limit_remaining}/{result.info.rate_limit_limit}")
    print(f"✓ Token saved to {describe_location(result.location, config)}")
    return 0


async def run_status(manager: AuthManager, args: argparse.Namespace, config: VaultSettings) -> int:
    result = await manager.status(verify=not args.no_verify)
    if result.info is not None:
        print(f"User: {result.info.login}")
        print(f"Scopes: {result.info.describe_scopes()}")
        print(f"Rate limit: {result.info.rate_limit_remaining}/{result.info.rate_limit_limit}")
    print(f"Token type: {result.validation.type.value}")
    print(f"Stored in: {describe_location(result.location, config)}")
    return 0


async def run(args: argparse.Namespace, config: VaultSettings) -> int:
    """Dispatch an ``auth`` subcommand."""
    if args.auth_command == "token":
        raise TokenDisplayDisabledError()

    store = create_credential_store(config)

    if args.auth_command == "logout":
        await AuthManager(store).logout()
        print("✓ Token removed")
        return 0

    async with GitHubClient(config) as http_client:
        manager = AuthManager(store, http_client)
        if args.auth_command == "login":
            return await run_login(manager, args, config)
        return await run_status(manager, args, config)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print_error(f"Error: invalid configuration: {e}")
        return 2

    configure_logging(config.log_level, debug=args.debug or config.debug)

    errors = config.validate_config()
    if errors:
        print_error("Configuration errors:")
        for error in errors:
            print_error(f"  - {error}")
        return 2

    try:
        return asyncio.run(run(args, config))
    except KeyboardInterrupt:
        print_error("\nCancelled.")
        return 130
    except Exception as e:
        logger.debug("Command failed", command=args.auth_command, exc_info=True)
        handle_error(e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
