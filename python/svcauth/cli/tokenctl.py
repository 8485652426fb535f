#!/usr/bin/env python3
"""
svcauth/cli/tokenctl.py

CLI for inspecting credentials:
  - cache-key
  - fetch

With --key-path, the JSON key at that path is loaded (service account or
authorized user, chosen by its `type` field). Without it, application default
credentials are used (GOOGLE_APPLICATION_CREDENTIALS, then the gcloud file).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Callable, List, Optional

from google.auth import exceptions as google_exceptions

from svcauth.credentials import (
    CredentialLoader,
    DefaultCredentialsError,
    ServiceAccountCredentials,
    get_application_default_credentials,
    make_credentials,
    read_json_key,
)
from svcauth.models.settings import CredentialSettings


#
# Subcommand handlers
#
def run_cache_key(args: argparse.Namespace) -> None:
    """Print the cache key of the selected credentials as JSON."""
    creds = _build_credentials(args)
    print(json.dumps({"cache_key": creds.get_cache_key()}, indent=2))


def run_fetch(args: argparse.Namespace) -> None:
    """
    Fetch an access token and print it as JSON.

    Raises SystemExit on error.
    """
    creds = _build_credentials(args)
    try:
        token = creds.fetch_auth_token()
    except (google_exceptions.GoogleAuthError, ValueError) as exc:
        print(f"Error: cannot fetch access token: {exc}", file=sys.stderr)
        sys.exit(1)
    print(token.model_dump_json(indent=2))


#
# Helpers
#
def _build_credentials(args: argparse.Namespace) -> CredentialLoader:
    """
    Load credentials from --key-path, or from application default credentials.

    Exits with error if the key cannot be loaded.
    """
    settings = CredentialSettings()
    # Each --scope may itself be space-delimited.
    scope = " ".join(args.scope)
    try:
        if args.key_path is None:
            return get_application_default_credentials(scope, settings, sub=args.sub)
        json_key = read_json_key(args.key_path)
        # A console key may omit `type`.
        if "type" not in json_key:
            return ServiceAccountCredentials(
                scope,
                json_key,
                sub=args.sub,
                token_credential_uri=settings.token_credential_uri,
            )
        return make_credentials(
            scope,
            json_key,
            sub=args.sub,
            token_credential_uri=settings.token_credential_uri,
        )
    except (OSError, ValueError, DefaultCredentialsError) as exc:
        print(f"Error: cannot load credentials: {exc}", file=sys.stderr)
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """
    CLI entry point for credential operations:
      - cache-key
      - fetch
    """
    parser = argparse.ArgumentParser(
        prog="svcauth.cli.tokenctl",
        description="Inspect Google credentials: print their cache key or fetch a token.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        help="Sub-command to run. Use -h/--help after a subcommand for more usage details.",
    )

    cache_key_parser = subparsers.add_parser(
        "cache-key", help="Print the cache key for the credentials."
    )
    _add_credential_cli_args(cache_key_parser)
    cache_key_parser.set_defaults(func=run_cache_key)

    fetch_parser = subparsers.add_parser(
        "fetch", help="Fetch an access token from the token endpoint."
    )
    _add_credential_cli_args(fetch_parser)
    fetch_parser.set_defaults(func=run_fetch)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    func: Callable[[argparse.Namespace], None] = args.func
    func(args)


def _add_credential_cli_args(subparser: argparse.ArgumentParser) -> None:
    """Add the credential selection arguments to a subcommand parser."""
    subparser.add_argument(
        "--key-path",
        default=None,
        help="Path to a JSON key file (default: application default credentials).",
    )
    subparser.add_argument(
        "--scope",
        action="append",
        required=True,
        help="OAuth2 scope; repeat for several scopes.",
    )
    subparser.add_argument(
        "--sub",
        default=None,
        help="Email address to impersonate (service accounts with domain-wide delegation).",
    )


if __name__ == "__main__":
    main()
