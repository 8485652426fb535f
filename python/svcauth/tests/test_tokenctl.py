import json
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict

import pytest
from google.auth import exceptions as google_exceptions
from google.oauth2 import service_account

from svcauth.cli.tokenctl import main


def test_cache_key_from_key_path(
    capsys: pytest.CaptureFixture[str], clean_env: Path, sa_key: Dict[str, Any], sa_key_file: str
) -> None:
    main(["cache-key", "--key-path", sa_key_file, "--scope", "s1", "--scope", "s2"])
    out = json.loads(capsys.readouterr().out)
    assert out == {"cache_key": f"{sa_key['client_email']}:s1:s2"}


def test_cache_key_with_sub(
    capsys: pytest.CaptureFixture[str], clean_env: Path, sa_key: Dict[str, Any], sa_key_file: str
) -> None:
    main(["cache-key", "--key-path", sa_key_file, "--scope", "s1", "--sub", "u@x.com"])
    out = json.loads(capsys.readouterr().out)
    assert out["cache_key"] == f"{sa_key['client_email']}:s1:u@x.com"


def test_cache_key_untyped_console_key(
    capsys: pytest.CaptureFixture[str], clean_env: Path, json_file: Callable[[str, Any], str]
) -> None:
    path = json_file("bare.json", {"client_email": "a@b.com", "private_key": "PEMDATA"})
    main(["cache-key", "--key-path", path, "--scope", "scope1 scope2"])
    assert json.loads(capsys.readouterr().out) == {"cache_key": "a@b.com:scope1:scope2"}


def test_cache_key_from_application_default(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    clean_env: Path,
    user_key: Dict[str, Any],
    user_key_file: str,
) -> None:
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", user_key_file)
    main(["cache-key", "--scope", "s1"])
    assert json.loads(capsys.readouterr().out) == {"cache_key": f"{user_key['client_id']}:s1"}


def test_missing_field_exits(
    capsys: pytest.CaptureFixture[str], clean_env: Path, json_file: Callable[[str, Any], str]
) -> None:
    path = json_file("partial.json", {"private_key": "PEMDATA"})
    with pytest.raises(SystemExit) as exc_info:
        main(["cache-key", "--key-path", path, "--scope", "s1"])
    assert exc_info.value.code == 1
    assert "client_email" in capsys.readouterr().err


def test_missing_file_exits(
    capsys: pytest.CaptureFixture[str], clean_env: Path, tmp_path: Path
) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["cache-key", "--key-path", str(tmp_path / "nope.json"), "--scope", "s1"])
    assert exc_info.value.code == 1
    assert "cannot load credentials" in capsys.readouterr().err


def test_no_default_credentials_exits(
    capsys: pytest.CaptureFixture[str], clean_env: Path
) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["fetch", "--scope", "s1"])
    assert exc_info.value.code == 1
    assert "GOOGLE_APPLICATION_CREDENTIALS" in capsys.readouterr().err


def test_fetch_prints_token(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    clean_env: Path,
    sa_key_file: str,
) -> None:
    def fake_refresh(self: Any, request: Any) -> None:
        self.token = "ya29.cli-token"
        self.expiry = datetime(2030, 1, 1)

    monkeypatch.setattr(service_account.Credentials, "refresh", fake_refresh)
    main(["fetch", "--key-path", sa_key_file, "--scope", "s1"])
    out = json.loads(capsys.readouterr().out)
    assert out["access_token"] == "ya29.cli-token"
    assert out["token_type"] == "Bearer"
    assert out["expiry"].startswith("2030-01-01")


def test_fetch_refresh_error_exits(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    clean_env: Path,
    sa_key_file: str,
) -> None:
    def failing_refresh(self: Any, request: Any) -> None:
        raise google_exceptions.RefreshError("invalid_grant: account not found")

    monkeypatch.setattr(service_account.Credentials, "refresh", failing_refresh)
    with pytest.raises(SystemExit) as exc_info:
        main(["fetch", "--key-path", sa_key_file, "--scope", "s1"])
    assert exc_info.value.code == 1
    assert "invalid_grant" in capsys.readouterr().err


def test_space_delimited_and_repeated_scopes(
    capsys: pytest.CaptureFixture[str], clean_env: Path, sa_key: Dict[str, Any], sa_key_file: str
) -> None:
    main(["cache-key", "--key-path", sa_key_file, "--scope", "s1 s2", "--scope", "s3"])
    out = json.loads(capsys.readouterr().out)
    assert out == {"cache_key": f"{sa_key['client_email']}:s1:s2:s3"}


def test_sub_applied_to_application_default_service_account(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    clean_env: Path,
    sa_key: Dict[str, Any],
    sa_key_file: str,
) -> None:
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", sa_key_file)
    main(["cache-key", "--scope", "s1", "--sub", "u@x.com"])
    out = json.loads(capsys.readouterr().out)
    assert out == {"cache_key": f"{sa_key['client_email']}:s1:u@x.com"}


def test_sub_rejected_for_application_default_authorized_user(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    clean_env: Path,
    user_key_file: str,
) -> None:
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", user_key_file)
    with pytest.raises(SystemExit) as exc_info:
        main(["cache-key", "--scope", "s1", "--sub", "u@x.com"])
    assert exc_info.value.code == 1
    assert "only supported for service_account keys" in capsys.readouterr().err


def test_sub_rejected_for_authorized_user_key_path(
    capsys: pytest.CaptureFixture[str], clean_env: Path, user_key_file: str
) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["cache-key", "--key-path", user_key_file, "--scope", "s1", "--sub", "u@x.com"])
    assert exc_info.value.code == 1
    err = capsys.readouterr().err
    assert "only supported for service_account keys" in err
    assert "client_email" not in err
