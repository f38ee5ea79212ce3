from __future__ import annotations

from engine.registry import ChoiceRegistry
from engine.visibility import AnyOf, Unset, parse_match_spec, should_show
from state.persistent import PersistentStore
from state.storage import MemoryStorage


def _registry() -> ChoiceRegistry:
    return ChoiceRegistry(PersistentStore(MemoryStorage(), namespace="ns"))


def test_parse_match_spec():
    assert parse_match_spec("unset") == Unset()
    assert parse_match_spec(" unset ") == Unset()
    assert parse_match_spec("us, eu") == AnyOf(frozenset({"us", "eu"}))


def test_any_of_trims_entries_and_has_stable_spec():
    rule = AnyOf.from_spec(" b , a")
    assert rule.values == frozenset({"a", "b"})
    assert rule.spec == "a,b"


def test_unset_rule_follows_has_value():
    reg = _registry()
    assert should_show("plan", Unset(), reg) is True
    reg.trigger("plan", "free")
    assert should_show("plan", Unset(), reg) is False


def test_any_of_rule_follows_matches_values():
    reg = _registry()
    rule = parse_match_spec("us, eu, apac")
    assert should_show("region", rule, reg) is False
    reg.trigger("region", "eu")
    assert should_show("region", rule, reg) is True
    reg.trigger("region", "EU")
    assert should_show("region", rule, reg) is False


def test_should_show_is_pure_over_a_view():
    class _View:
        def has_value(self, key):
            return key == "set"

        def matches_values(self, key, values):
            return values == "x"

    assert should_show("set", Unset(), _View()) is False
    assert should_show("other", Unset(), _View()) is True
    assert should_show("any", AnyOf(frozenset({"x"})), _View()) is True
