from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar


logger = logging.getLogger(__name__)

C = TypeVar("C", bound=Callable[..., Any])

Unsubscribe = Callable[[], None]


@dataclass(frozen=True)
class ChoiceUpdate:
    """Payload of the namespace-wide notification sent for every trigger."""

    key: str
    value: Optional[str]
    old_value: Optional[str]


class _Registration:
    __slots__ = ("callback",)

    def __init__(self, callback: Callable[..., Any]) -> None:
        self.callback = callback


class CallbackList(Generic[C]):
    """
    Ordered callbacks with per-registration removal.

    - Registering the same callable twice yields two registrations.
    - The returned unsubscribe removes exactly its own registration and is
      safe to call more than once.
    - `notify` works on a copy, so (un)subscribing from inside a callback
      only affects later notifications.
    - A callback that raises is logged and skipped; the rest still run.
    """

    def __init__(self, label: str) -> None:
        self._label = label
        self._entries: List[_Registration] = []

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, callback: C) -> Unsubscribe:
        entry = _Registration(callback)
        self._entries.append(entry)

        def unsubscribe() -> None:
            # identity match: only this registration, never an equal sibling
            for i, existing in enumerate(self._entries):
                if existing is entry:
                    del self._entries[i]
                    return

        return unsubscribe

    def notify(self, *args: Any) -> None:
        for entry in list(self._entries):
            try:
                entry.callback(*args)
            except Exception:
                logger.warning("%s callback %r failed", self._label, entry.callback, exc_info=True)


class Broadcast:
    """Namespace-wide notification channel for observers that do not `listen` per key."""

    def __init__(self) -> None:
        self._subscribers: CallbackList[Callable[[ChoiceUpdate], None]] = CallbackList("Broadcast")

    def subscribe(self, callback: Callable[[ChoiceUpdate], None]) -> Unsubscribe:
        return self._subscribers.add(callback)

    def dispatch(self, update: ChoiceUpdate) -> None:
        self._subscribers.notify(update)
