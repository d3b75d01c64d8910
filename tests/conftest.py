import json
import subprocess
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from prbench.config import PipelineConfig

_ENV_VARS = [
    "GITHUB_TOKEN",
    "GH_TOKEN",
    "GITHUB_API_URL",
    "GITHUB_EVENT_PATH",
    "PRBENCH_MARKER_LABEL",
    "PRBENCH_TARGET_PACKAGE",
    "PRBENCH_IAI_BENCH",
    "PRBENCH_CRITERION_BENCH",
    "PRBENCH_PUBLISH_TIMEOUT",
    "PRBENCH_MAX_OUTPUT_CHARS",
    "PRBENCH_SKIP_PROVISION",
    "PRBENCH_LOG_LEVEL",
    "PRBENCH_DOTENV_PATH",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def mock_config() -> PipelineConfig:
    return PipelineConfig(github_token="ghp-test-token-12345", skip_provision=True)


@pytest.fixture
def labeled_payload() -> dict[str, Any]:
    return {
        "action": "labeled",
        "number": 42,
        "label": {"name": "benchmark", "color": "ededed"},
        "pull_request": {"number": 42, "title": "Speed up MSM"},
        "repository": {"name": "r", "full_name": "o/r", "owner": {"login": "o"}},
    }


@pytest.fixture
def event_file(tmp_path: Path, labeled_payload: dict[str, Any]) -> Path:
    path = tmp_path / "event.json"
    path.write_text(json.dumps(labeled_payload), encoding="utf-8")
    return path


@pytest.fixture
def make_completed():
    def _make(
        argv: list[str], stdout: str | bytes = "", returncode: int = 0
    ) -> subprocess.CompletedProcess:
        return subprocess.CompletedProcess(
            args=argv, returncode=returncode, stdout=stdout, stderr=None
        )

    return _make


@pytest.fixture
def comment_response() -> dict[str, Any]:
    return {
        "id": 1234567,
        "html_url": "https://github.com/o/r/pull/42#issuecomment-1234567",
        "body": "...",
    }


@pytest.fixture
def mock_httpx_success(comment_response: dict[str, Any]) -> Generator[MagicMock, None, None]:
    """Mock httpx.Client for a successful comment creation."""
    mock_response = MagicMock()
    mock_response.status_code = 201
    mock_response.is_success = True
    mock_response.json.return_value = comment_response
    mock_response.text = json.dumps(comment_response)

    mock_client = MagicMock()
    mock_client.__enter__.return_value = mock_client
    mock_client.__exit__.return_value = None
    mock_client.post.return_value = mock_response

    with patch("prbench.clients.github.httpx.Client", return_value=mock_client):
        yield mock_client


def _error_client(status_code: int, body: dict[str, Any]) -> MagicMock:
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.is_success = False
    mock_response.text = json.dumps(body)

    mock_client = MagicMock()
    mock_client.__enter__.return_value = mock_client
    mock_client.__exit__.return_value = None
    mock_client.post.return_value = mock_response
    return mock_client


@pytest.fixture
def mock_httpx_error():
    """Factory: patch httpx.Client to answer with the given error status."""
    patchers = []

    def _install(status_code: int, body: dict[str, Any] | None = None) -> MagicMock:
        client = _error_client(status_code, body or {"message": "error"})
        p = patch("prbench.clients.github.httpx.Client", return_value=client)
        p.start()
        patchers.append(p)
        return client

    yield _install

    for p in patchers:
        p.stop()
