from __future__ import annotations

import json
from collections import deque
from typing import Callable, Deque, Dict, List, Optional

from engine.events import ChoiceUpdate
from engine.registry import ChoiceRegistry


MAX_UPDATES = 50


class DebugPanel:
    """
    Out-of-band view of the registry: one option's value plus the full state.

    Refreshes on per-key notifications for `option` and on every broadcast,
    so changes to other keys still show up in `all_state`.
    """

    def __init__(self, registry: ChoiceRegistry, option: str) -> None:
        self._registry = registry
        self.option = option
        self.current_value: Optional[str] = None
        self.all_state: Dict[str, str] = {}
        self.updates: Deque[ChoiceUpdate] = deque(maxlen=MAX_UPDATES)
        self._refresh()
        self._unsubscribers: List[Callable[[], None]] = [
            registry.listen(option, self._on_change),
            registry.broadcast.subscribe(self._on_broadcast),
        ]

    def _refresh(self) -> None:
        self.current_value = self._registry.get_value(self.option)
        self.all_state = self._registry.snapshot()

    def _on_change(self, _value, _old_value) -> None:
        self._refresh()

    def _on_broadcast(self, update: ChoiceUpdate) -> None:
        self.updates.append(update)
        self._refresh()

    def render(self) -> str:
        current = self.current_value if self.current_value is not None else "undefined"
        return "\n".join(
            [
                "Choice Debug:",
                f"Option: {self.option}",
                f"Current Value: {current}",
                f"All State: {json.dumps(self.all_state, indent=2, sort_keys=True)}",
            ]
        )

    def dispose(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
