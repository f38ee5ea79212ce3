from __future__ import annotations

from engine.gate import BlockVisibility, GateState, LazyRenderGate
from engine.registry import ChoiceRegistry
from engine.visibility import Unset, parse_match_spec
from state.persistent import PersistentStore
from state.reset import clear_namespace
from state.storage import MemoryStorage


def test_gate_starts_dormant_and_reveal_is_sticky():
    gate = LazyRenderGate()
    assert gate.state is GateState.DORMANT
    assert gate.observe(False) is GateState.DORMANT
    assert gate.observe(True) is GateState.REVEALED
    assert gate.observe(False) is GateState.REVEALED
    assert gate.revealed is True


def test_lazy_block_mounts_once_and_stays_mounted():
    reg = ChoiceRegistry(PersistentStore(MemoryStorage(), namespace="ns"))
    block = BlockVisibility(key="tier", rule=parse_match_spec("enterprise"), lazy=True)

    block.evaluate(reg)
    assert (block.mounted, block.visible) == (False, False)

    reg.trigger("tier", "free")
    block.evaluate(reg)
    assert (block.mounted, block.visible) == (False, False)

    reg.trigger("tier", "enterprise")
    block.evaluate(reg)
    assert (block.mounted, block.visible) == (True, True)

    reg.trigger("tier", "free")
    block.evaluate(reg)
    assert (block.mounted, block.visible) == (True, False)
    assert block.has_ever_shown is True


def test_non_lazy_block_is_always_mounted():
    reg = ChoiceRegistry(PersistentStore(MemoryStorage(), namespace="ns"))
    block = BlockVisibility(key="tier", rule=parse_match_spec("enterprise"))

    block.evaluate(reg)
    assert (block.mounted, block.visible) == (True, False)


def test_unset_block_presentation_is_stateless_after_bulk_clear():
    storage = MemoryStorage()
    reg = ChoiceRegistry(PersistentStore(storage, namespace="ns"))
    block = BlockVisibility(key="plan", rule=Unset(), lazy=True)

    assert block.evaluate(reg) is True
    assert block.visible is True

    reg.trigger("plan", "pro")
    assert block.evaluate(reg) is False
    assert (block.mounted, block.visible) == (True, False)

    clear_namespace(storage, "ns")
    reg.reload()
    assert block.evaluate(reg) is True
    assert block.gate.state is GateState.REVEALED
