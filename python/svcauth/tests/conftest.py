"""
svcauth/tests/conftest.py

Shared fixtures: a freshly generated RSA key, service account and authorized
user keys, and key files written under tmp_path.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from svcauth.models.settings import CredentialSettings


@pytest.fixture(scope="session")
def private_key_pem() -> str:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


@pytest.fixture
def sa_key(private_key_pem: str) -> Dict[str, Any]:
    return {
        "type": "service_account",
        "project_id": "my-gcp-project",
        "private_key_id": "0123456789abcdef",
        "private_key": private_key_pem,
        "client_email": "robot@my-gcp-project.iam.gserviceaccount.com",
        "client_id": "1234567890",
        "token_uri": "https://oauth2.googleapis.com/token",
    }


@pytest.fixture
def user_key() -> Dict[str, Any]:
    return {
        "type": "authorized_user",
        "client_id": "client-123.apps.googleusercontent.com",
        "client_secret": "shh",
        "refresh_token": "1//refresh",
    }


def write_json(path: Path, data: Any) -> str:
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


@pytest.fixture
def json_file(tmp_path: Path) -> Callable[[str, Any], str]:
    """Writes data as JSON to tmp_path/name and returns the path."""
    return lambda name, data: write_json(tmp_path / name, data)


@pytest.fixture
def sa_key_file(tmp_path: Path, sa_key: Dict[str, Any]) -> str:
    return write_json(tmp_path / "sa.json", sa_key)


@pytest.fixture
def user_key_file(tmp_path: Path, user_key: Dict[str, Any]) -> str:
    return write_json(tmp_path / "adc.json", user_key)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Clears credential env vars and points HOME at an empty directory."""
    for name in (
        "GOOGLE_APPLICATION_CREDENTIALS",
        "SVCAUTH_TOKEN_CREDENTIAL_URI",
        "SVCAUTH_WELL_KNOWN_PATH",
        "SVCAUTH_GOOGLE_APPLICATION_CREDENTIALS",
    ):
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("APPDATA", str(home))
    return home


@pytest.fixture
def settings(clean_env: Path) -> CredentialSettings:
    return CredentialSettings()
