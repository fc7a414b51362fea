"""In-memory blob reader."""
from io import BytesIO
from typing import Dict, List, Tuple

from photo_people.core.errors import NotFoundError
from .base import ReadStream, StorageRepository


class InMemoryStorageRepository(StorageRepository):
    """Serves blobs from a dict and records every open call."""

    def __init__(self, blobs: Dict[str, bytes] = None):
        self.blobs = dict(blobs or {})
        self.opened: List[Tuple[str, str]] = []

    def open_read_stream(self, path: str, content_type: str) -> ReadStream:
        self.opened.append((path, content_type))
        if path not in self.blobs:
            raise NotFoundError(f"Object not found: {path}")
        data = self.blobs[path]
        return ReadStream(stream=BytesIO(data), content_type=content_type, length=len(data))
