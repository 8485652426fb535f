"""
svcauth/credentials/user_refresh.py

UserRefreshCredentials authorize with a user's refresh token, as written to
the well-known file by `gcloud auth application-default login`.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from svcauth.credentials.loader import (
    CredentialLoader,
    TOKEN_CREDENTIAL_URI,
    read_json_key,
)
from svcauth.credentials.oauth2 import OAuth2, ScopeSpec
from svcauth.models.api_keys import AuthorizedUserKey
from svcauth.models.validator import validate_type


class UserRefreshCredentials(CredentialLoader):
    """Credentials for an OAuth2 client holding a long-lived refresh token."""

    def __init__(
        self,
        scope: ScopeSpec,
        json_key: Optional[Mapping[str, Any]] = None,
        json_key_path: Optional[str] = None,
        *,
        token_credential_uri: str = TOKEN_CREDENTIAL_URI,
    ) -> None:
        """
        Args:
            scope: A list of scopes or a space-delimited string.
            json_key: The decoded `authorized_user` JSON. If set, json_key_path is ignored.
            json_key_path: Path to a file containing that JSON.
            token_credential_uri: The OAuth2 token endpoint.

        Raises:
            OSError, json.JSONDecodeError: If the key file cannot be loaded.
            ValueError: If client_id, client_secret or refresh_token is missing.
        """
        if json_key is None:
            if json_key_path is None:
                raise ValueError("Either json_key or json_key_path must be provided.")
            json_key = read_json_key(json_key_path)
        key = AuthorizedUserKey.from_json_key(json_key)

        self.auth = validate_type(
            {
                "client_id": key.client_id,
                "client_secret": key.client_secret,
                "refresh_token": key.refresh_token,
                "scope": scope,
                "token_credential_uri": token_credential_uri,
            },
            OAuth2,
            source="OAuth2 configuration",
        )

    def get_cache_key(self) -> str:
        return f"{self.auth.get_client_id()}:{self.auth.get_cache_key() or ''}"


__all__ = ["UserRefreshCredentials"]
