"""
filename: svcauth/models/api_keys.py

Pydantic models for the JSON keys downloadable from the Google developer console
(service accounts) or written by `gcloud auth application-default login`
(authorized users).
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from svcauth.models.validator import validate_type


def _require_fields(raw: Mapping[str, Any], fields: Tuple[str, ...]) -> Dict[str, Any]:
    """Checks presence of each field, in order, before any type validation.

    Raises:
        ValueError: Naming the first missing field.
    """
    data = validate_type(raw, Dict[str, Any], source="json key")
    for field in fields:
        if field not in data:
            raise ValueError(f"json key is missing the {field} field")
    return data


class ServiceAccountKey(BaseModel):
    """
    A service account JSON key. Only client_email and private_key are used;
    the remaining console fields are optional and anything unknown is kept as-is.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    client_email: str = Field(..., min_length=1)
    private_key: str = Field(..., min_length=1, repr=False)
    type: Optional[str] = None
    project_id: Optional[str] = None
    private_key_id: Optional[str] = None
    client_id: Optional[str] = None
    token_uri: Optional[str] = None
    universe_domain: Optional[str] = Field(
        default=None, description="Typically 'googleapis.com'"
    )

    @classmethod
    def from_json_key(cls, raw: Mapping[str, Any]) -> ServiceAccountKey:
        """Builds the model from decoded JSON, client_email checked before private_key.

        Raises:
            ValueError: If a required field is missing, empty or not a string.
        """
        data = _require_fields(raw, ("client_email", "private_key"))
        return validate_type(data, cls, source="json key")


class AuthorizedUserKey(BaseModel):
    """An `authorized_user` key holding an OAuth2 client and its refresh token."""

    model_config = ConfigDict(extra="allow", frozen=True)

    client_id: str = Field(..., min_length=1)
    client_secret: str = Field(..., min_length=1, repr=False)
    refresh_token: str = Field(..., min_length=1, repr=False)
    type: Optional[str] = None

    @classmethod
    def from_json_key(cls, raw: Mapping[str, Any]) -> AuthorizedUserKey:
        data = _require_fields(raw, ("client_id", "client_secret", "refresh_token"))
        return validate_type(data, cls, source="json key")


__all__ = ["ServiceAccountKey", "AuthorizedUserKey"]
