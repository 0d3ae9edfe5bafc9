"""HTTP client for the remote analysis service.

Three calls:
- ``predict``:  POST /predict?sample_every=N (multipart field ``file``)
- ``download``: GET <base><download_url>, caching disabled
- ``delete_job`` / ``signal_delete``: DELETE /delete/{job_id}, best effort
"""

from __future__ import annotations

import logging
import threading
from typing import Any

import requests

from deepfakeguard.config import ApiConfig
from deepfakeguard.workflow.errors import ContractError, TransportError
from deepfakeguard.workflow.types import DownloadedMedia, SelectedFile

logger = logging.getLogger(__name__)

NO_STORE_HEADERS = {"Cache-Control": "no-store", "Pragma": "no-cache"}


def _error_detail(response: requests.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("detail"):
        detail = body["detail"]
        return detail if isinstance(detail, str) else None
    return None


class AnalysisClient:
    def __init__(self, config: ApiConfig | None = None, session: requests.Session | None = None) -> None:
        self.config = config or ApiConfig()
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _connection_error(self) -> TransportError:
        return TransportError(f"Could not connect to the analysis API at {self.base_url}.")

    def predict(self, selected: SelectedFile) -> Any:
        """Upload ``selected`` and return the decoded JSON body of a 2xx response.

        The body is returned unparsed so the caller can record the job id
        before validating the rest of the payload.
        """
        files = {"file": (selected.name, selected.data, selected.mime_type)}
        try:
            response = self._session.post(
                self.config.predict_url(),
                params={"sample_every": self.config.sample_every},
                files=files,
                timeout=self.config.predict_timeout,
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as exc:
            logger.info("Predict request to %s failed: %s", self.base_url, exc)
            raise self._connection_error() from exc

        if not response.ok:
            message = _error_detail(response) or f"Analysis failed (HTTP {response.status_code})."
            raise TransportError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise ContractError("Unexpected response from analysis API.") from exc

    def download(self, download_url: str) -> DownloadedMedia:
        url = self.config.absolute_url(download_url)
        try:
            response = self._session.get(url, headers=NO_STORE_HEADERS, timeout=self.config.download_timeout)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as exc:
            logger.info("Download from %s failed: %s", url, exc)
            raise self._connection_error() from exc

        if not response.ok:
            raise TransportError(
                f"Failed to download output (HTTP {response.status_code}).",
                status_code=response.status_code,
            )

        content_type = response.headers.get("Content-Type") or None
        if content_type:
            content_type = content_type.split(";", 1)[0].strip() or None
        return DownloadedMedia(data=response.content, content_type=content_type)

    def delete_job(self, job_id: str | None) -> bool:
        """Ask the server to drop ``job_id``. Never raises; returns whether a 2xx came back."""
        if not job_id:
            return False
        try:
            response = self._session.delete(self.config.delete_url(job_id), timeout=self.config.cleanup_timeout)
        except requests.exceptions.RequestException as exc:
            logger.debug("Cleanup of job %s failed: %s", job_id, exc)
            return False
        if not response.ok:
            logger.debug("Cleanup of job %s returned HTTP %s", job_id, response.status_code)
        return bool(response.ok)

    def signal_delete(self, job_id: str | None) -> threading.Thread | None:
        """Fire-and-forget ``delete_job`` on a daemon thread.

        Used at teardown, where nothing may wait on the network. The returned
        thread is only for tests; callers must not join it on the teardown path.
        """
        if not job_id:
            return None
        t = threading.Thread(
            target=self.delete_job,
            args=(job_id,),
            name=f"deepfakeguard-cleanup-{job_id}",
            daemon=True,
        )
        t.start()
        return t
