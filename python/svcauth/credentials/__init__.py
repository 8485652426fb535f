"""
svcauth.credentials

Unified import for the credential loaders:
- CredentialLoader (the capability every loader implements)
- ServiceAccountCredentials, UserRefreshCredentials
- OAuth2 / AccessToken (the token fetcher they configure)
- application default credential lookup
"""

from svcauth.credentials.loader import (
    CredentialLoader,
    TOKEN_CREDENTIAL_URI,
    read_json_key,
)
from svcauth.credentials.oauth2 import AccessToken, OAuth2
from svcauth.credentials.service_account import ServiceAccountCredentials
from svcauth.credentials.user_refresh import UserRefreshCredentials
from svcauth.credentials.application_default import (
    DefaultCredentialsError,
    from_env,
    from_well_known_file,
    get_application_default_credentials,
    make_credentials,
)

__all__ = [
    "AccessToken",
    "CredentialLoader",
    "DefaultCredentialsError",
    "OAuth2",
    "ServiceAccountCredentials",
    "TOKEN_CREDENTIAL_URI",
    "UserRefreshCredentials",
    "from_env",
    "from_well_known_file",
    "get_application_default_credentials",
    "make_credentials",
    "read_json_key",
]
