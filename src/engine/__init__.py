"""
Choice-state engine.

Modules:
- registry: ChoiceRegistry (trigger/read/listen) on top of a PersistentStore
- events: per-key callback lists and the namespace-wide Broadcast
- visibility: MatchRule (Unset / AnyOf) and should_show
- gate: LazyRenderGate and per-block visibility state
"""

from .events import Broadcast, ChoiceUpdate
from .gate import BlockVisibility, GateState, LazyRenderGate
from .registry import ChoiceRegistry
from .visibility import AnyOf, MatchRule, Unset, parse_match_spec, should_show

__all__ = [
    "AnyOf",
    "BlockVisibility",
    "Broadcast",
    "ChoiceRegistry",
    "ChoiceUpdate",
    "GateState",
    "LazyRenderGate",
    "MatchRule",
    "Unset",
    "parse_match_spec",
    "should_show",
]
