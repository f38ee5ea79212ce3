from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol


DEFAULT_STORAGE_PATH_ENV = "CHOICE_STORAGE_PATH"


class StorageError(RuntimeError):
    """Raised when a storage area cannot be read or written."""


class StorageArea(Protocol):
    """String key -> string value area, shaped like browser localStorage."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def keys(self) -> List[str]: ...


def _default_storage_file() -> Path:
    # Prefer explicit env var, else project-local .cache folder
    path = os.environ.get(DEFAULT_STORAGE_PATH_ENV)
    if path:
        return Path(path)
    return Path(".cache") / "choice_storage.json"


class MemoryStorage:
    """
    In-process storage area.

    `fail_writes=True` makes every `set_item` raise `StorageError`, which
    stands in for a full quota or storage disabled by the browser.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None, *, fail_writes: bool = False) -> None:
        self._items: Dict[str, str] = dict(initial or {})
        self.fail_writes = fail_writes

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("storage quota exceeded")
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._items)


class FileStorage:
    """
    JSON-file-backed storage area.

    - Backed by a single JSON file: { key: value, ... } with string values.
    - Loaded lazily on first access; a corrupt or non-object file reads as empty.
    - Every mutation rewrites the whole file. Write failures raise `StorageError`
      and leave the in-memory copy unchanged.
    """

    def __init__(self, path: Optional[os.PathLike[str] | str] = None) -> None:
        self._path = Path(path) if path else _default_storage_file()
        self._items: Dict[str, str] = {}
        self._loaded = False

    @property
    def path(self) -> Path:
        return self._path

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._loaded = True
        try:
            if self._path.exists():
                with self._path.open("r", encoding="utf-8") as f:
                    raw = json.load(f)
                    if isinstance(raw, dict):
                        # keep string values only
                        self._items = {str(k): v for k, v in raw.items() if isinstance(v, str)}
        except (OSError, ValueError):
            # Corrupt file: start fresh; the next write replaces it
            self._items = {}

    def _write(self, items: Dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, sort_keys=True)
        except OSError as ex:
            raise StorageError(f"Failed to write storage file {self._path}") from ex
        self._items = items

    def get_item(self, key: str) -> Optional[str]:
        self._ensure_loaded()
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._ensure_loaded()
        items = dict(self._items)
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        self._ensure_loaded()
        if key not in self._items:
            return
        items = dict(self._items)
        del items[key]
        self._write(items)

    def keys(self) -> List[str]:
        self._ensure_loaded()
        return list(self._items)
