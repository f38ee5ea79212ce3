"""
Persistence for choice state.

Storage areas hold namespaced string items (memory, JSON file, or
encrypted S3 objects). `PersistentStore` loads and saves the single
choice snapshot document on top of a storage area.
"""

from .models import Snapshot
from .persistent import PersistentStore
from .storage import FileStorage, MemoryStorage, StorageError

__all__ = ["Snapshot", "PersistentStore", "FileStorage", "MemoryStorage", "StorageError"]
