from __future__ import annotations

import json
import logging
from typing import Mapping, Union

from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from .models import Snapshot
from .storage import StorageArea, StorageError


logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "com.box.developer"
STATE_SUFFIX = "choice_state"


def state_key(namespace: str) -> str:
    return f"{namespace}.{STATE_SUFFIX}"


def _dump_snapshot_json(snapshot: Snapshot) -> str:
    # Deterministic JSON: stable key order, no extra whitespace
    return json.dumps(snapshot.model_dump(), separators=(",", ":"), sort_keys=True)


def _load_snapshot_json(data: str) -> Snapshot:
    return Snapshot.model_validate(json.loads(data))


class PersistentStore:
    """
    Durable load/save of the choice snapshot under one namespaced key.

    Neither operation raises. Unreadable, missing or malformed content loads
    as an empty snapshot; a failed save keeps whatever was persisted before.
    The caller's in-memory snapshot stays authoritative either way.
    """

    def __init__(self, storage: StorageArea, *, namespace: str = DEFAULT_NAMESPACE) -> None:
        self._storage = storage
        self._namespace = namespace
        self._key = state_key(namespace)

    @property
    def storage(self) -> StorageArea:
        return self._storage

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> Snapshot:
        try:
            raw = self._storage.get_item(self._key)
        except (StorageError, ClientError, BotoCoreError, OSError) as ex:
            logger.warning("Failed to load choice state from %s: %s", self._key, ex)
            return Snapshot.empty()

        if raw is None:
            return Snapshot.empty()

        try:
            return _load_snapshot_json(raw)
        except (ValueError, ValidationError) as ex:
            logger.warning("Ignoring malformed choice state under %s: %s", self._key, ex)
            return Snapshot.empty()

    def save(self, snapshot: Union[Snapshot, Mapping[str, str]]) -> bool:
        """Persist `snapshot`; returns False (after logging) when validation or the write failed."""
        try:
            if not isinstance(snapshot, Snapshot):
                snapshot = Snapshot.model_validate(dict(snapshot))
            payload = _dump_snapshot_json(snapshot)
            self._storage.set_item(self._key, payload)
        except (StorageError, ClientError, BotoCoreError, OSError, TypeError, ValueError) as ex:
            logger.warning("Failed to save choice state to %s: %s", self._key, ex)
            return False
        return True
