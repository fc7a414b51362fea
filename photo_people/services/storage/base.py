"""Blob reader interface for stored thumbnails."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Optional


@dataclass
class ReadStream:
    """Open byte stream for a stored blob."""
    stream: BinaryIO
    content_type: str
    length: Optional[int] = None

    def iter_chunks(self, chunk_size: int = 64 * 1024) -> Iterator[bytes]:
        """Yield the blob in chunks, closing the stream when exhausted."""
        try:
            while True:
                chunk = self.stream.read(chunk_size)
                if not chunk:
                    break
                yield chunk
        finally:
            self.stream.close()


class StorageRepository(ABC):
    """Opens stored blobs by path."""

    @abstractmethod
    def open_read_stream(self, path: str, content_type: str) -> ReadStream:
        """Open ``path`` for reading; raises NotFoundError if it does not exist."""
