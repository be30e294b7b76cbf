"""Test configuration and fixtures."""

import logfire
import pytest

from tests.factories import HOME_REALM


@pytest.fixture(scope="session", autouse=True)
def quiet_logfire():
    """Keep Logfire local and silent during tests."""
    logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Point Settings at a private deployment and a per-test data directory.

    The working directory moves to tmp_path so no developer .env is read.
    """
    monkeypatch.chdir(tmp_path)
    for name in ("PRIVATE_MODE_PUBLIC_OVERRIDE", "ADMINS", "DEBUG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("ALLOWED_REALM_URL", HOME_REALM)
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
