from __future__ import annotations

from typing import Callable, Optional

from engine.gate import BlockVisibility
from engine.registry import ChoiceRegistry
from engine.visibility import AnyOf, MatchRule, should_show


class ChoiceBinding:
    """
    Conditional block bound to one option key.

    Re-evaluates on every notification for its key. `on_mount` runs once,
    when the block first becomes mounted: immediately for non-lazy blocks,
    on first reveal for lazy ones.
    """

    def __init__(
        self,
        registry: ChoiceRegistry,
        option: str,
        rule: MatchRule,
        *,
        lazy: bool = False,
        on_mount: Optional[Callable[[], None]] = None,
    ) -> None:
        self._registry = registry
        self._on_mount = on_mount
        self._mount_fired = False
        self.state = BlockVisibility(key=option, rule=rule, lazy=lazy)
        self._update()
        self._unsubscribe: Optional[Callable[[], None]] = registry.listen(option, self._on_change)

    @property
    def option(self) -> str:
        return self.state.key

    @property
    def mounted(self) -> bool:
        return self.state.mounted

    @property
    def visible(self) -> bool:
        return self.state.visible

    def _update(self) -> None:
        self.state.evaluate(self._registry)
        if self.state.mounted and not self._mount_fired:
            self._mount_fired = True
            if self._on_mount is not None:
                self._on_mount()

    def _on_change(self, _value, _old_value) -> None:
        self._update()

    def dispose(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None


class ObserveBinding:
    """Shows its content only while the value matches; unmounted otherwise."""

    def __init__(self, registry: ChoiceRegistry, option: str, rule: AnyOf) -> None:
        self._registry = registry
        self.option = option
        self.rule = rule
        self.mounted = should_show(option, rule, registry)
        self._unsubscribe: Optional[Callable[[], None]] = registry.listen(option, self._on_change)

    @property
    def visible(self) -> bool:
        return self.mounted

    def _on_change(self, _value, _old_value) -> None:
        self.mounted = should_show(self.option, self.rule, self._registry)

    def dispose(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
