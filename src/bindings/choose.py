from __future__ import annotations

from typing import Callable, Optional

from engine.registry import ChoiceRegistry


class TriggerBinding:
    """Activating the element sets `option` to `value`; nothing else is tracked."""

    def __init__(self, registry: ChoiceRegistry, option: str, value: str) -> None:
        self._registry = registry
        self.option = option
        self.value = value

    def activate(self) -> None:
        # no toggle-off: selecting the current value re-applies it
        self._registry.trigger(self.option, self.value)

    def dispose(self) -> None:
        pass


class ChooseBinding(TriggerBinding):
    """
    A selectable option within a group sharing one option key.

    - is_selected: the group's current value is this option's value.
    - has_option_triggered: the group has any value at all.
    - dimmed: something else in the group is selected.
    """

    def __init__(self, registry: ChoiceRegistry, option: str, value: str) -> None:
        super().__init__(registry, option, value)
        self.is_selected = False
        self.has_option_triggered = False
        self._refresh()
        self._unsubscribe: Optional[Callable[[], None]] = registry.listen(option, self._on_change)

    @property
    def dimmed(self) -> bool:
        return self.has_option_triggered and not self.is_selected

    def _refresh(self) -> None:
        self.is_selected = self._registry.get_value(self.option) == self.value
        self.has_option_triggered = self._registry.has_value(self.option)

    def _on_change(self, _value, _old_value) -> None:
        self._refresh()

    def dispose(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
