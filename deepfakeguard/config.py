# deepfakeguard/config.py

import os
from dataclasses import dataclass, field
from typing import Tuple

# --- Base paths ---
# Project root can be overridden if needed (e.g. for tests or deployment)
BASE_DIR = os.path.abspath(os.getenv("DEEPFAKEGUARD_BASE_DIR", os.path.join(os.path.dirname(__file__), "..")))

DEFAULT_API_BASE_URL = "http://localhost:8000"

ACCEPTED_TYPES: Tuple[str, ...] = (
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/webp",
    "image/bmp",
    "image/gif",
    "video/mp4",
    "video/quicktime",
    "video/x-matroska",
    "video/webm",
    "video/x-msvideo",
)


def normalize_base_url(raw: str | None) -> str:
    """Return ``raw`` with every trailing slash removed.

    Empty or missing values fall back to ``DEFAULT_API_BASE_URL``.
    """
    value = str(raw or "").strip() or DEFAULT_API_BASE_URL
    return value.rstrip("/")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


# ---------------------------
# Structured configuration
# ---------------------------

@dataclass(frozen=True)
class ApiConfig:
    """Remote analysis service configuration.

    Values can be overridden via environment variables:
    - DEEPFAKEGUARD_API_BASE_URL
    - DEEPFAKEGUARD_SAMPLE_EVERY
    - DEEPFAKEGUARD_PREDICT_TIMEOUT
    - DEEPFAKEGUARD_DOWNLOAD_TIMEOUT
    - DEEPFAKEGUARD_CLEANUP_TIMEOUT
    """

    base_url: str = field(
        default_factory=lambda: normalize_base_url(os.getenv("DEEPFAKEGUARD_API_BASE_URL"))
    )
    sample_every: int = field(default_factory=lambda: _env_int("DEEPFAKEGUARD_SAMPLE_EVERY", 15))
    # Seconds. Video analysis can take minutes on CPU-only backends.
    predict_timeout: float = field(
        default_factory=lambda: _env_float("DEEPFAKEGUARD_PREDICT_TIMEOUT", 300.0)
    )
    download_timeout: float = field(
        default_factory=lambda: _env_float("DEEPFAKEGUARD_DOWNLOAD_TIMEOUT", 120.0)
    )
    cleanup_timeout: float = field(
        default_factory=lambda: _env_float("DEEPFAKEGUARD_CLEANUP_TIMEOUT", 5.0)
    )

    def predict_url(self) -> str:
        return f"{self.base_url}/predict"

    def absolute_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def delete_url(self, job_id: str) -> str:
        return f"{self.base_url}/delete/{job_id}"


@dataclass(frozen=True)
class UploadConfig:
    """Selection rules applied before anything reaches the network."""

    accepted_types: Tuple[str, ...] = ACCEPTED_TYPES
    max_size_mb: int = field(default_factory=lambda: _env_int("DEEPFAKEGUARD_MAX_UPLOAD_MB", 250))


@dataclass(frozen=True)
class PathsConfig:
    """Filesystem locations for per-session workflow event logs.

    - DEEPFAKEGUARD_STATE_DIR
    """

    state_dir: str = field(
        default_factory=lambda: os.getenv(
            "DEEPFAKEGUARD_STATE_DIR", os.path.join(BASE_DIR, "ui_state")
        )
    )

    def events_dir(self) -> str:
        return os.path.join(self.state_dir, "events")


@dataclass(frozen=True)
class ClientConfig:
    api: ApiConfig = field(default_factory=ApiConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)


_CLIENT_CONFIG: ClientConfig | None = None


def get_client_config() -> ClientConfig:
    """Return the process-wide configuration, reading the environment on first use."""
    global _CLIENT_CONFIG
    if _CLIENT_CONFIG is None:
        _CLIENT_CONFIG = ClientConfig()
    return _CLIENT_CONFIG


def reset_client_config() -> None:
    """Forget the cached configuration so the next read sees the current environment."""
    global _CLIENT_CONFIG
    _CLIENT_CONFIG = None
