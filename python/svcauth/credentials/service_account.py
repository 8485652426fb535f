"""
svcauth/credentials/service_account.py

ServiceAccountCredentials supports authorization using a Google service
account (cf https://developers.google.com/identity/protocols/oauth2/service-account).

It is initialized from the JSON key downloadable from the developer console,
which must contain the client_email and private_key fields it uses:

    creds = ServiceAccountCredentials(
        "https://www.googleapis.com/auth/taskqueue",
        json_key_path="/path/to/key.json",
    )
    cache_key = creds.get_cache_key()
    token = creds.fetch_auth_token()
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from svcauth.credentials.loader import (
    CredentialLoader,
    TOKEN_CREDENTIAL_URI,
    read_json_key,
)
from svcauth.credentials.oauth2 import OAuth2, ScopeSpec
from svcauth.models.api_keys import ServiceAccountKey
from svcauth.models.validator import validate_type

logger = logging.getLogger(__name__)


class ServiceAccountCredentials(CredentialLoader):
    """Credentials for a service account, optionally impersonating a user."""

    def __init__(
        self,
        scope: ScopeSpec,
        json_key: Optional[Union[Mapping[str, Any], ServiceAccountKey]] = None,
        json_key_path: Optional[str] = None,
        sub: Optional[str] = None,
        *,
        token_credential_uri: str = TOKEN_CREDENTIAL_URI,
    ) -> None:
        """
        Create a new ServiceAccountCredentials.

        Args:
            scope: The scope of the access request, as a list or as a
                space-delimited string.
            json_key: The decoded JSON key. If set, json_key_path is ignored.
            json_key_path: Path to a file containing the JSON key.
            sub: An email address to impersonate, when the service account
                has been delegated domain-wide access.
            token_credential_uri: The OAuth2 token endpoint, also used as the
                JWT audience.

        Raises:
            OSError: If json_key_path cannot be read.
            json.JSONDecodeError: If the key file is not valid JSON.
            ValueError: If no key is given, client_email / private_key is missing,
                or the scope is malformed.
        """
        if isinstance(json_key, ServiceAccountKey):
            key = json_key
        else:
            if json_key is None:
                if json_key_path is None:
                    raise ValueError("Either json_key or json_key_path must be provided.")
                json_key = read_json_key(json_key_path)
            key = ServiceAccountKey.from_json_key(json_key)

        self.auth = validate_type(
            {
                "audience": token_credential_uri,
                "issuer": key.client_email,
                "scope": scope,
                "signing_algorithm": "RS256",
                "signing_key": key.private_key,
                "sub": sub,
                "token_credential_uri": token_credential_uri,
            },
            OAuth2,
            source="OAuth2 configuration",
        )
        logger.debug("Configured service account credentials for %s", key.client_email)

    def get_cache_key(self) -> str:
        key = f"{self.auth.get_issuer()}:{self.auth.get_cache_key() or ''}"
        sub = self.auth.get_sub()
        if sub:
            key += f":{sub}"
        return key


__all__ = ["ServiceAccountCredentials"]
