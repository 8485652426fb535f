"""
svcauth/credentials/application_default.py

Locates application default credentials:
  1) the key file named by GOOGLE_APPLICATION_CREDENTIALS
  2) the gcloud well-known file (~/.config/gcloud/application_default_credentials.json)

Either file may hold a `service_account` or an `authorized_user` key; the
`type` field picks the loader.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, Mapping, Optional

from svcauth.credentials.loader import CredentialLoader, read_json_key
from svcauth.credentials.oauth2 import ScopeSpec
from svcauth.credentials.service_account import ServiceAccountCredentials
from svcauth.credentials.user_refresh import UserRefreshCredentials
from svcauth.models.settings import CredentialSettings, TOKEN_CREDENTIAL_URI

logger = logging.getLogger(__name__)

ENV_VAR = "GOOGLE_APPLICATION_CREDENTIALS"


class DefaultCredentialsError(RuntimeError):
    """Raised when no application default credentials can be found."""


def _service_account(
    scope: ScopeSpec, json_key: Mapping[str, Any], token_uri: str, sub: Optional[str]
) -> CredentialLoader:
    return ServiceAccountCredentials(
        scope, json_key, sub=sub, token_credential_uri=token_uri
    )


def _authorized_user(
    scope: ScopeSpec, json_key: Mapping[str, Any], token_uri: str, sub: Optional[str]
) -> CredentialLoader:
    if sub:
        raise ValueError(
            "sub (domain-wide delegation) is only supported for service_account keys"
        )
    return UserRefreshCredentials(scope, json_key, token_credential_uri=token_uri)


KEY_TYPE_MAP: Dict[
    str,
    Callable[[ScopeSpec, Mapping[str, Any], str, Optional[str]], CredentialLoader],
] = {
    "service_account": _service_account,
    "authorized_user": _authorized_user,
}


def make_credentials(
    scope: ScopeSpec,
    json_key: Mapping[str, Any],
    *,
    sub: Optional[str] = None,
    token_credential_uri: str = TOKEN_CREDENTIAL_URI,
) -> CredentialLoader:
    """
    Builds the loader matching json_key["type"].

    Args:
        sub: Account to impersonate; only valid for service_account keys.

    Raises:
        ValueError: If the type field is missing or unsupported, the key
            lacks a field its loader requires, or sub is given for a key
            that cannot impersonate.
    """
    if "type" not in json_key:
        raise ValueError("json key is missing the type field")
    key_type = json_key["type"]
    if key_type not in KEY_TYPE_MAP:
        raise ValueError("invalid value in the type field")
    return KEY_TYPE_MAP[key_type](scope, json_key, token_credential_uri, sub)


def from_env(
    scope: ScopeSpec,
    settings: Optional[CredentialSettings] = None,
    *,
    sub: Optional[str] = None,
) -> Optional[CredentialLoader]:
    """
    Loads the key file named by GOOGLE_APPLICATION_CREDENTIALS.

    Returns:
        Optional[CredentialLoader]: None if the variable is unset or empty.

    Raises:
        FileNotFoundError: If the variable names a file that does not exist.
    """
    settings = settings or CredentialSettings()
    path = settings.google_application_credentials
    if not path:
        return None
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Unable to read the credential file specified by {ENV_VAR}: {path}")
    logger.debug("Using credentials from %s=%s", ENV_VAR, path)
    return make_credentials(
        scope,
        read_json_key(path),
        sub=sub,
        token_credential_uri=settings.token_credential_uri,
    )


def from_well_known_file(
    scope: ScopeSpec,
    settings: Optional[CredentialSettings] = None,
    *,
    sub: Optional[str] = None,
) -> Optional[CredentialLoader]:
    """
    Loads the gcloud application default credentials file.

    Returns:
        Optional[CredentialLoader]: None if the file does not exist.
    """
    settings = settings or CredentialSettings()
    path = settings.resolve_well_known_path()
    if not os.path.isfile(path):
        return None
    logger.debug("Using credentials from well-known file %s", path)
    return make_credentials(
        scope,
        read_json_key(path),
        sub=sub,
        token_credential_uri=settings.token_credential_uri,
    )


def get_application_default_credentials(
    scope: ScopeSpec,
    settings: Optional[CredentialSettings] = None,
    *,
    sub: Optional[str] = None,
) -> CredentialLoader:
    """
    Returns the first credentials found in the environment, then the well-known file.

    Raises:
        DefaultCredentialsError: If neither source holds credentials.
    """
    settings = settings or CredentialSettings()
    creds = from_env(scope, settings, sub=sub)
    if creds is None:
        creds = from_well_known_file(scope, settings, sub=sub)
    if creds is None:
        raise DefaultCredentialsError(
            f"Could not load the default credentials. Set {ENV_VAR} or run "
            "`gcloud auth application-default login`."
        )
    return creds


__all__ = [
    "DefaultCredentialsError",
    "ENV_VAR",
    "from_env",
    "from_well_known_file",
    "get_application_default_credentials",
    "make_credentials",
]
