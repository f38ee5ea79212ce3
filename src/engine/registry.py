from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from state.persistent import PersistentStore

from .events import Broadcast, CallbackList, ChoiceUpdate, Unsubscribe


logger = logging.getLogger(__name__)

Listener = Callable[[Optional[str], Optional[str]], None]


class ChoiceRegistry:
    """
    In-memory choice state with per-key listeners and a broadcast channel.

    Notes
    - The snapshot is restored from `store` at construction. After that the
      in-memory copy is authoritative; persistence failures only log.
    - `trigger` is fully synchronous: write, save, per-key listeners in
      registration order, then one broadcast. Re-triggering an unchanged value
      runs the whole sequence again.
    - Nothing here polls storage. Changes made behind the registry's back
      (e.g. a bulk clear) become visible through `reload()`.
    """

    def __init__(self, store: PersistentStore, *, broadcast: Optional[Broadcast] = None) -> None:
        self._store = store
        self._broadcast = broadcast or Broadcast()
        self._state: Dict[str, str] = store.load().as_dict()
        self._listeners: Dict[str, CallbackList[Listener]] = {}

    @property
    def store(self) -> PersistentStore:
        return self._store

    @property
    def broadcast(self) -> Broadcast:
        return self._broadcast

    # --------------- Writes ---------------
    def trigger(self, key: str, value: str) -> None:
        old_value = self._state.get(key)
        self._state[key] = value
        self._store.save(self._state)
        self._notify(key, value, old_value)

    def reload(self) -> None:
        """Re-read persisted state and notify every key whose value changed."""
        fresh = self._store.load().as_dict()
        previous = self._state
        self._state = dict(fresh)
        for key in sorted(set(previous) | set(fresh)):
            if previous.get(key) != fresh.get(key):
                self._notify(key, fresh.get(key), previous.get(key))

    def _notify(self, key: str, value: Optional[str], old_value: Optional[str]) -> None:
        listeners = self._listeners.get(key)
        if listeners is not None:
            listeners.notify(value, old_value)
        self._broadcast.dispatch(ChoiceUpdate(key=key, value=value, old_value=old_value))

    # --------------- Reads ---------------
    def get_value(self, key: str) -> Optional[str]:
        return self._state.get(key)

    def has_value(self, key: str) -> bool:
        return self._state.get(key) is not None

    def matches_values(self, key: str, values: object) -> bool:
        """True iff the current value equals one comma-separated entry of `values`.

        Entries are trimmed; comparison is exact and case-sensitive. A missing
        or empty current value never matches, nor does a non-string `values`.
        """
        if not isinstance(values, str):
            return False
        current = self._state.get(key)
        if not current:
            return False
        return current in (v.strip() for v in values.split(","))

    def snapshot(self) -> Dict[str, str]:
        return dict(self._state)

    # --------------- Subscriptions ---------------
    def listen(self, key: str, callback: Listener) -> Unsubscribe:
        listeners = self._listeners.get(key)
        if listeners is None:
            listeners = self._listeners[key] = CallbackList(f"Choice listener[{key}]")
        return listeners.add(callback)
