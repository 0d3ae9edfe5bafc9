"""Memory-backed media handles.

A ``MediaStore`` plays the role of the browser's object-URL table: it maps a
``blob:`` URL to the bytes behind it until the URL is released. The workflow
owns one store and two ``HandleSlot``s (preview and result); every creation
and release goes through a slot, so each handle is released exactly once.
"""

from __future__ import annotations

import logging
import threading
import uuid

from deepfakeguard.workflow.errors import HandleReleasedError
from deepfakeguard.workflow.types import MediaHandle

logger = logging.getLogger(__name__)


class MediaStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._live: dict[str, bytes] = {}

    def create(self, data: bytes, media_type: str | None) -> MediaHandle:
        handle = MediaHandle(url=f"blob:{uuid.uuid4()}", media_type=media_type, size=len(data))
        with self._lock:
            self._live[handle.url] = bytes(data)
        logger.debug("Created media handle %s (%d bytes)", handle.url, handle.size)
        return handle

    def read(self, handle: MediaHandle) -> bytes:
        with self._lock:
            try:
                return self._live[handle.url]
            except KeyError:
                raise HandleReleasedError(handle.url) from None

    def release(self, handle: MediaHandle) -> None:
        with self._lock:
            if self._live.pop(handle.url, None) is None:
                raise HandleReleasedError(handle.url)
        logger.debug("Released media handle %s", handle.url)

    def is_live(self, handle: MediaHandle) -> bool:
        with self._lock:
            return handle.url in self._live

    def __len__(self) -> int:
        with self._lock:
            return len(self._live)


class HandleSlot:
    """Holds at most one live handle from ``store``."""

    def __init__(self, store: MediaStore, name: str) -> None:
        self._store = store
        self.name = name
        self._current: MediaHandle | None = None

    @property
    def current(self) -> MediaHandle | None:
        return self._current

    def set(self, data: bytes, media_type: str | None) -> MediaHandle:
        self.clear()
        self._current = self._store.create(data, media_type)
        return self._current

    def clear(self) -> None:
        handle, self._current = self._current, None
        if handle is not None:
            self._store.release(handle)

    def read(self) -> bytes | None:
        if self._current is None:
            return None
        return self._store.read(self._current)
