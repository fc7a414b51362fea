from .base import ReadStream, StorageRepository
from .memory import InMemoryStorageRepository
from .s3 import S3StorageRepository

__all__ = [
    "ReadStream",
    "StorageRepository",
    "InMemoryStorageRepository",
    "S3StorageRepository",
]
