"""
svcauth

Loads Google service account (and authorized user) JSON keys and configures
OAuth2 token fetchers from them. See svcauth.credentials for the loaders.
"""

from svcauth.credentials import (
    AccessToken,
    CredentialLoader,
    DefaultCredentialsError,
    OAuth2,
    ServiceAccountCredentials,
    TOKEN_CREDENTIAL_URI,
    UserRefreshCredentials,
    get_application_default_credentials,
    make_credentials,
)

__version__ = "0.1.0"

__all__ = [
    "AccessToken",
    "CredentialLoader",
    "DefaultCredentialsError",
    "OAuth2",
    "ServiceAccountCredentials",
    "TOKEN_CREDENTIAL_URI",
    "UserRefreshCredentials",
    "get_application_default_credentials",
    "make_credentials",
]
