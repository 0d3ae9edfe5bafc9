"""Unit tests for the analysis API client (no real HTTP)."""

from __future__ import annotations

import pytest
import requests

from deepfakeguard.workflow.client import AnalysisClient
from deepfakeguard.workflow.errors import ContractError, TransportError

from conftest import BASE_URL, FakeResponse, FakeSession


@pytest.fixture
def real_client(api_config, session: FakeSession) -> AnalysisClient:
    return AnalysisClient(api_config, session=session)


def test_predict_posts_multipart_with_sample_every(real_client, session, png_file) -> None:
    session.route("POST", "/predict", FakeResponse(json_body={"job_id": "abc"}))

    body = real_client.predict(png_file)

    assert body == {"job_id": "abc"}
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", f"{BASE_URL}/predict")
    assert kwargs["params"] == {"sample_every": 15}
    assert kwargs["files"]["file"] == ("face.png", png_file.data, "image/png")
    assert kwargs["timeout"] == 1.0


def test_predict_error_uses_detail(real_client, session, png_file) -> None:
    session.route("POST", "/predict", FakeResponse(500, json_body={"detail": "model unavailable"}))

    with pytest.raises(TransportError) as exc_info:
        real_client.predict(png_file)

    assert exc_info.value.message == "model unavailable"
    assert exc_info.value.status_code == 500


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse(502),
        FakeResponse(422, json_body={"detail": [{"msg": "Field required"}]}),
        FakeResponse(503, json_body=["not", "an", "object"]),
    ],
)
def test_predict_error_falls_back_to_status_message(real_client, session, png_file, response) -> None:
    session.route("POST", "/predict", response)

    with pytest.raises(TransportError) as exc_info:
        real_client.predict(png_file)

    assert exc_info.value.message == f"Analysis failed (HTTP {response.status_code})."


def test_predict_connection_error(real_client, session, png_file) -> None:
    session.route("POST", "/predict", requests.exceptions.ConnectionError("refused"))

    with pytest.raises(TransportError) as exc_info:
        real_client.predict(png_file)

    assert exc_info.value.message == f"Could not connect to the analysis API at {BASE_URL}."
    assert exc_info.value.status_code is None


def test_predict_non_json_success_is_contract_error(real_client, session, png_file) -> None:
    session.route("POST", "/predict", FakeResponse(200, content=b"<html>"))

    with pytest.raises(ContractError):
        real_client.predict(png_file)


def test_download_disables_caching_and_strips_content_type_params(real_client, session) -> None:
    session.route(
        "GET",
        "/download/abc",
        FakeResponse(content=b"PNGDATA", headers={"Content-Type": "image/png; charset=binary"}),
    )

    media = real_client.download("/download/abc")

    assert media.data == b"PNGDATA"
    assert media.content_type == "image/png"
    _, _, kwargs = session.calls[0]
    assert kwargs["headers"]["Cache-Control"] == "no-store"


def test_download_failure(real_client, session) -> None:
    session.route("GET", "/download/abc", FakeResponse(410))

    with pytest.raises(TransportError) as exc_info:
        real_client.download("/download/abc")

    assert exc_info.value.message == "Failed to download output (HTTP 410)."


def test_delete_job_absorbs_failures(real_client, session) -> None:
    session.route("DELETE", "/delete/ok", FakeResponse(200))
    session.route("DELETE", "/delete/gone", FakeResponse(404))
    session.route("DELETE", "/delete/down", requests.exceptions.ConnectionError("down"))

    assert real_client.delete_job("ok") is True
    assert real_client.delete_job("gone") is False
    assert real_client.delete_job("down") is False
    assert real_client.delete_job(None) is False
    assert ("DELETE", f"{BASE_URL}/delete/ok") in session.methods()


def test_signal_delete_runs_in_background(real_client, session) -> None:
    session.route("DELETE", "/delete/abc", FakeResponse(200))

    t = real_client.signal_delete("abc")
    assert t is not None and t.daemon
    t.join(timeout=5)

    assert ("DELETE", f"{BASE_URL}/delete/abc") in session.methods()
    assert real_client.signal_delete(None) is None
