from core.storage.config import GCSConfig
from core.storage.manager import MediaStorageManager
from core.storage.provider import MediaStorageProvider
from core.storage.types import FileDescriptor, MediaCategory, StorageBackend, StoredMedia

__all__ = [
    "FileDescriptor",
    "GCSConfig",
    "MediaCategory",
    "MediaStorageManager",
    "MediaStorageProvider",
    "StorageBackend",
    "StoredMedia",
]
