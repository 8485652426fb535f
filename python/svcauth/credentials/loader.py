"""
svcauth/credentials/loader.py

Defines the CredentialLoader capability shared by every credential type,
plus the JSON key file reader they use.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from google.auth.transport.requests import Request as GoogleRequest

from svcauth.credentials.oauth2 import AccessToken, OAuth2
from svcauth.models.settings import TOKEN_CREDENTIAL_URI
from svcauth.models.validator import validate_type

logger = logging.getLogger(__name__)


def read_json_key(path: str) -> Dict[str, Any]:
    """
    Reads a UTF-8 JSON key file and returns its top-level object.

    Raises:
        OSError: If the file cannot be read.
        json.JSONDecodeError: If the contents are not valid JSON.
        ValueError: If the JSON is not an object.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    logger.debug("Read json key from %s", path)
    return validate_type(raw, Dict[str, Any], source=path)


class CredentialLoader(ABC):
    """
    A configured source of access tokens. Subclasses build their `auth`
    fetcher once, at construction, and never change it afterwards.
    """

    auth: OAuth2

    @abstractmethod
    def get_cache_key(self) -> str:
        """
        Returns a string identifying this credential configuration, for use
        as a lookup key by an external token cache. Not a secret.
        """

    def fetch_auth_token(self, request: Optional[GoogleRequest] = None) -> AccessToken:
        """Fetches a new access token through the configured OAuth2 fetcher."""
        return self.auth.fetch_auth_token(request)


__all__ = ["CredentialLoader", "TOKEN_CREDENTIAL_URI", "read_json_key"]
