"""Test configuration and fixtures."""

import io
from pathlib import Path
from typing import Callable

import pytest
from dotenv import load_dotenv

from breed_fetch.config import ENV_VARS, Settings
from breed_fetch.prompt import PromptSession


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest."""
    config.addinivalue_line("markers", "asyncio: mark test as async")
    config.addinivalue_line(
        "markers",
        "live: mark test as a live test against the real breed API",
    )


@pytest.fixture(autouse=True)
def env_setup(
    request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Set up environment variables for testing.

    Args:
        request: Pytest fixture request
        monkeypatch: Pytest monkeypatch fixture
    """
    # Load .env file for live tests
    if "live" in request.keywords:
        load_dotenv()
    # Keep a developer's environment out of non-live tests
    else:
        for var in ENV_VARS:
            monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_prompt() -> Callable[[str], PromptSession]:
    """Build prompt sessions fed from a string instead of the terminal."""

    def _make(text: str) -> PromptSession:
        return PromptSession(
            input_stream=io.StringIO(text), output_stream=io.StringIO()
        )

    return _make


@pytest.fixture
def output_file(tmp_path: Path) -> Path:
    return tmp_path / "img.txt"


@pytest.fixture
def settings_for(output_file: Path) -> Callable[..., Settings]:
    """Settings pointed at a fake API and a temporary output file."""

    def _settings(url_template: str, **kwargs) -> Settings:
        return Settings(
            url_template=url_template,
            output_path=str(output_file),
            **kwargs,
        )

    return _settings
