"""File selection checks applied before any network activity."""

from __future__ import annotations

import mimetypes

from deepfakeguard.config import UploadConfig
from deepfakeguard.workflow.types import SelectedFile, ValidationResult

NO_FILE_MESSAGE = "No file selected."
UNSUPPORTED_TYPE_MESSAGE = "Unsupported file type."


def too_large_message(max_size_mb: int) -> str:
    return f"File too large. Max {max_size_mb} MB."


def validate(candidate: SelectedFile | None, rules: UploadConfig | None = None) -> ValidationResult:
    """Return whether ``candidate`` may be submitted, and why not if it may not."""
    rules = rules or UploadConfig()

    if candidate is None:
        return ValidationResult.reject(NO_FILE_MESSAGE)
    if candidate.mime_type not in rules.accepted_types:
        return ValidationResult.reject(UNSUPPORTED_TYPE_MESSAGE)
    if candidate.size_mb > rules.max_size_mb:
        return ValidationResult.reject(too_large_message(rules.max_size_mb))
    return ValidationResult.accept()


def accepted_extensions(rules: UploadConfig | None = None) -> list[str]:
    """Extensions (without dot) for the file uploader's ``type=`` filter."""
    rules = rules or UploadConfig()
    exts: set[str] = set()
    for mime in rules.accepted_types:
        for ext in mimetypes.guess_all_extensions(mime, strict=False):
            exts.add(ext.lstrip(".").lower())
    # Not every platform's mimetypes table knows these.
    extra = {
        "image/jpg": "jpg",
        "video/x-matroska": "mkv",
        "video/webm": "webm",
        "video/quicktime": "mov",
        "video/x-msvideo": "avi",
        "image/webp": "webp",
    }
    for mime, ext in extra.items():
        if mime in rules.accepted_types:
            exts.add(ext)
    return sorted(exts)
