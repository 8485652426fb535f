# svcauth/models/settings.py

import os
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

TOKEN_CREDENTIAL_URI = "https://oauth2.googleapis.com/token"
WELL_KNOWN_PATH = os.path.join("gcloud", "application_default_credentials.json")


class CredentialSettings(BaseSettings):
    """
    Pydantic settings for locating application default credentials.
    Fields map to environment variables prefixed with `SVCAUTH_`, except
    the key file path, which uses the standard GOOGLE_APPLICATION_CREDENTIALS.
    """

    model_config = SettingsConfigDict(env_prefix="SVCAUTH_")

    token_credential_uri: str = TOKEN_CREDENTIAL_URI
    well_known_path: Optional[str] = None  # None => gcloud's default location
    google_application_credentials: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "GOOGLE_APPLICATION_CREDENTIALS", "google_application_credentials"
        ),
    )

    def resolve_well_known_path(self) -> str:
        """Returns the gcloud application default credentials file path."""
        if self.well_known_path:
            return self.well_known_path
        if os.name == "nt":
            root = os.environ.get("APPDATA", "")
        else:
            root = os.path.join(os.environ.get("HOME", ""), ".config")
        return os.path.join(root, WELL_KNOWN_PATH)
