"""Pytest configuration and shared fakes.

Makes the project root importable (``import deepfakeguard``) and provides a
stand-in for ``requests.Session`` so workflow tests never touch the network.
"""

from __future__ import annotations

import os
import sys
from typing import Any, Callable, Union

import pytest

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from deepfakeguard.config import ApiConfig, ClientConfig, UploadConfig  # noqa: E402
from deepfakeguard.workflow.client import AnalysisClient  # noqa: E402
from deepfakeguard.workflow.types import SelectedFile  # noqa: E402

BASE_URL = "http://api.test"
MB = 1024 * 1024


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        *,
        json_body: Any = None,
        content: bytes = b"",
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self._json_body = json_body
        self.content = content
        self.headers = headers or {}

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._json_body is None:
            raise ValueError("no JSON body")
        return self._json_body


Route = Union[FakeResponse, Exception, Callable[..., FakeResponse]]


class FakeSession:
    """Routes ``(method, url)`` to a canned response, exception, or callable."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Route] = {}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def route(self, method: str, path: str, result: Route) -> None:
        self.routes[(method, f"{BASE_URL}{path}")] = result

    def _dispatch(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append((method, url, kwargs))
        result = self.routes.get((method, url))
        if result is None:
            return FakeResponse(404)
        if isinstance(result, Exception):
            raise result
        if callable(result) and not isinstance(result, FakeResponse):
            return result(**kwargs)
        return result

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._dispatch("POST", url, **kwargs)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._dispatch("GET", url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._dispatch("DELETE", url, **kwargs)

    def methods(self) -> list[tuple[str, str]]:
        return [(m, u) for m, u, _ in self.calls]


class RecordingClient(AnalysisClient):
    """AnalysisClient whose fire-and-forget deletes are recorded, not threaded."""

    def __init__(self, config: ApiConfig, session: FakeSession) -> None:
        super().__init__(config, session=session)  # type: ignore[arg-type]
        self.signalled: list[str] = []

    def signal_delete(self, job_id: str | None):  # noqa: ANN201
        if job_id:
            self.signalled.append(job_id)
        return None


@pytest.fixture
def api_config() -> ApiConfig:
    return ApiConfig(base_url=BASE_URL, sample_every=15, predict_timeout=1.0, download_timeout=1.0, cleanup_timeout=1.0)


@pytest.fixture
def client_config(api_config: ApiConfig) -> ClientConfig:
    return ClientConfig(api=api_config, upload=UploadConfig(max_size_mb=250))


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(api_config: ApiConfig, session: FakeSession) -> RecordingClient:
    return RecordingClient(api_config, session)


@pytest.fixture
def png_file() -> SelectedFile:
    return SelectedFile(name="face.png", mime_type="image/png", size=2 * MB, data=b"\x89PNG-original")


@pytest.fixture
def events() -> list[dict]:
    return []
