"""
svcauth/credentials/oauth2.py

Generic OAuth2 token-fetcher configuration. Holds what a credential loader
configures (issuer, scopes, signing key or refresh token, token endpoint) and
hands the actual token exchange to google-auth:

  - signing_key set   => JWT bearer grant via google.oauth2.service_account
  - refresh_token set => refresh-token grant via google.oauth2.credentials

Nothing here signs, caches or schedules refreshes; a fresh google-auth
credential is built on every fetch.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from google.auth import credentials as google_credentials
from google.auth.transport.requests import Request as GoogleRequest
from google.oauth2 import credentials as user_credentials
from google.oauth2 import service_account

from svcauth.models.settings import TOKEN_CREDENTIAL_URI

logger = logging.getLogger(__name__)

ScopeSpec = Union[str, List[str]]


class AccessToken(BaseModel):
    """An access token returned by the token endpoint."""

    access_token: str = Field(..., repr=False)
    expiry: Optional[datetime] = None
    token_type: str = "Bearer"


class OAuth2(BaseModel):
    """Configuration for one OAuth2 token fetcher."""

    model_config = ConfigDict(frozen=True)

    audience: Optional[str] = None
    issuer: Optional[str] = None
    scope: Optional[List[str]] = None
    signing_algorithm: Optional[Literal["RS256"]] = None
    signing_key: Optional[str] = Field(default=None, repr=False)
    sub: Optional[str] = None
    token_credential_uri: str = TOKEN_CREDENTIAL_URI
    client_id: Optional[str] = None
    client_secret: Optional[str] = Field(default=None, repr=False)
    refresh_token: Optional[str] = Field(default=None, repr=False)

    @field_validator("scope", mode="before")
    @classmethod
    def normalize_scope(cls, value: Any) -> Any:
        """
        Accepts a space-delimited string or a sequence of scopes, keeping the
        caller's order. Sequence items must not contain spaces.
        """
        if value is None:
            return None
        if isinstance(value, str):
            return [s for s in value.split(" ") if s]
        if isinstance(value, (list, tuple)):
            for s in value:
                if isinstance(s, str) and " " in s:
                    raise ValueError("array scope values should not contain spaces")
            return list(value)
        raise ValueError("scopes should be a string or array of strings")

    def get_issuer(self) -> Optional[str]:
        return self.issuer

    def get_sub(self) -> Optional[str]:
        return self.sub

    def get_client_id(self) -> Optional[str]:
        return self.client_id

    def get_cache_key(self) -> Optional[str]:
        """
        Identifies the token this fetcher would request: the scopes joined
        by ':', or the audience when no scope is configured.
        """
        if self.scope:
            return ":".join(self.scope)
        if self.audience:
            return self.audience
        return None

    def to_google_credentials(self) -> google_credentials.Credentials:
        """
        Builds the google-auth credential matching this configuration.

        Raises:
            ValueError: If neither a signing key nor a refresh token is configured,
                or if google-auth cannot parse the signing key.
        """
        if self.signing_key is not None:
            info: Dict[str, Any] = {
                "client_email": self.issuer,
                "private_key": self.signing_key,
                "token_uri": self.token_credential_uri,
            }
            extra: Dict[str, Any] = {}
            if self.audience and self.audience != self.token_credential_uri:
                extra["additional_claims"] = {"aud": self.audience}
            return service_account.Credentials.from_service_account_info(
                info, scopes=self.scope, subject=self.sub, **extra
            )
        if self.refresh_token is not None:
            return user_credentials.Credentials(
                token=None,
                refresh_token=self.refresh_token,
                client_id=self.client_id,
                client_secret=self.client_secret,
                token_uri=self.token_credential_uri,
                scopes=self.scope,
            )
        raise ValueError("OAuth2 needs either a signing_key or a refresh_token.")

    def fetch_auth_token(
        self, request: Optional[GoogleRequest] = None
    ) -> AccessToken:
        """
        Exchanges the configured grant for an access token.

        Args:
            request: google-auth HTTP transport; a requests-based one by default.

        Returns:
            AccessToken: The token and its expiry.

        Raises:
            google.auth.exceptions.RefreshError: If the token endpoint rejects the grant.
            google.auth.exceptions.TransportError: If the endpoint cannot be reached.
        """
        creds = self.to_google_credentials()
        creds.refresh(request or GoogleRequest())
        logger.debug(
            "Fetched access token from %s (expiry=%s)",
            self.token_credential_uri,
            creds.expiry,
        )
        return AccessToken(access_token=creds.token, expiry=creds.expiry)


__all__ = ["AccessToken", "OAuth2", "ScopeSpec"]
