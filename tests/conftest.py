"""
Pytest configuration and shared fixtures for meli_auth_sdk tests.
"""
import logging
import os
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from meli_auth_sdk.config import config
from meli_auth_sdk.fetch_client import FetchResponse


# Configure logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

KEY_ARN = "arn:aws:kms:us-east-1:026813942644:key/XXXXXXXX-XXXX-XXXX-XXXX-123456789876"


class MockConfigStore:
    """Mock ConfigStore for testing without loading YAML files."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self._config = config or {}
        self.get_calls = 0

    def get(self, key: str, default: Any = None) -> Any:
        """Get a top-level config value."""
        self.get_calls += 1
        return self._config.get(key, default)

    def set_config(self, config: Dict[str, Any]) -> None:
        """Update the mock config."""
        self._config = config


def make_response(
    status: int = 200,
    data: Any = None,
) -> FetchResponse:
    """Build a FetchResponse as returned by AsyncFetchClient."""
    return FetchResponse(
        status=status,
        status_text="",
        headers={},
        data=data,
        ok=200 <= status < 300,
    )


@pytest.fixture(autouse=True)
def reset_config():
    """Reset the ConfigStore singleton around each test."""
    config.reset()
    yield
    config.reset()


@pytest.fixture
def key_arn():
    return KEY_ARN


@pytest.fixture
def mock_config_store(key_arn):
    """Config store returning a valid kmsArn."""
    return MockConfigStore({"kmsArn": key_arn})


@pytest.fixture
def mock_fetch_client():
    """Stand-in for AsyncFetchClient with an AsyncMock get()."""
    client = MagicMock()
    client.get = AsyncMock(
        return_value=make_response(
            data={
                "credentials": "validcredentialencrypted-xxxsefweijio",
                "expiresIn": "01-01-2019",
            }
        )
    )
    return client


@pytest.fixture
def mock_provider():
    """Decryption provider whose decrypt() returns an access token."""
    provider = MagicMock()
    provider.decrypt = AsyncMock(return_value={"accessToken": "testresulttoken"})
    return provider


@pytest.fixture
def provider_factory(mock_provider):
    """Factory returning mock_provider, recording the key id it was built with."""
    return MagicMock(return_value=mock_provider)


@pytest.fixture
def assert_log_contains(caplog):
    """
    Fixture that provides a helper to assert log messages.
    Returns a function that checks if a log message contains expected text.
    """
    def _assert_log_contains(
        expected_text: str,
        level: Optional[str] = None,
    ) -> bool:
        for record in caplog.records:
            if level and record.levelname != level:
                continue
            if expected_text in record.message:
                return True

        all_messages = [
            f"[{r.levelname}] {r.name}: {r.message}"
            for r in caplog.records
        ]
        raise AssertionError(
            f"Expected log containing '{expected_text}' not found.\n"
            f"Captured logs ({len(caplog.records)}):\n" + "\n".join(all_messages)
        )

    return _assert_log_contains


@pytest.fixture
def clean_env():
    """
    Remove env vars read by the SDK and restore them afterwards.

    EnvStore.load() writes to os.environ through load_dotenv, which
    monkeypatch does not track.
    """
    keys = ["MELI_AUTH_BASE_URL", "AWS_REGION"]
    saved = {key: os.environ.pop(key, None) for key in keys}
    yield
    for key, value in saved.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value
