from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .visibility import MatchRule, RegistryView, should_show


class GateState(str, Enum):
    DORMANT = "dormant"
    REVEALED = "revealed"


class LazyRenderGate:
    """
    Tracks whether a block instance has ever been shown.

    DORMANT -> REVEALED the first time an observed evaluation is true.
    REVEALED is terminal for the lifetime of the instance.
    """

    def __init__(self) -> None:
        self._state = GateState.DORMANT

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def revealed(self) -> bool:
        return self._state is GateState.REVEALED

    def observe(self, shown: bool) -> GateState:
        if shown and self._state is GateState.DORMANT:
            self._state = GateState.REVEALED
        return self._state


@dataclass
class BlockVisibility:
    """
    Visibility state of one mounted conditional block.

    - `mounted`: a non-lazy block is always mounted; a lazy block is mounted
      once it has been shown and stays mounted afterwards.
    - `visible`: presentation toggle, follows the live evaluation.
    """

    key: str
    rule: MatchRule
    lazy: bool = False
    currently_shown: bool = False
    gate: LazyRenderGate = field(default_factory=LazyRenderGate)

    @property
    def has_ever_shown(self) -> bool:
        return self.gate.revealed

    @property
    def mounted(self) -> bool:
        return not self.lazy or self.gate.revealed

    @property
    def visible(self) -> bool:
        return self.mounted and self.currently_shown

    def evaluate(self, view: RegistryView) -> bool:
        """Recompute against `view`; returns the live shown flag."""
        self.currently_shown = should_show(self.key, self.rule, view)
        self.gate.observe(self.currently_shown)
        return self.currently_shown
