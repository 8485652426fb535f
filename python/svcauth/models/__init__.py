"""
models/__init__.py

Aggregate imports so the key models and settings can be accessed directly
from this package.
"""

from svcauth.models.api_keys import AuthorizedUserKey, ServiceAccountKey
from svcauth.models.settings import CredentialSettings, TOKEN_CREDENTIAL_URI
from svcauth.models.validator import validate_type

__all__ = [
    "AuthorizedUserKey",
    "ServiceAccountKey",
    "CredentialSettings",
    "TOKEN_CREDENTIAL_URI",
    "validate_type",
]
