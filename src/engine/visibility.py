from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Protocol, Union


UNSET_SPEC = "unset"


class RegistryView(Protocol):
    def has_value(self, key: str) -> bool: ...

    def matches_values(self, key: str, values: object) -> bool: ...


@dataclass(frozen=True)
class Unset:
    """Matches while the key has no value."""


@dataclass(frozen=True)
class AnyOf:
    """Matches while the key's value is one of `values` (exact, case-sensitive)."""

    values: FrozenSet[str]

    @classmethod
    def from_spec(cls, spec: str) -> "AnyOf":
        return cls(frozenset(v.strip() for v in spec.split(",")))

    @property
    def spec(self) -> str:
        # sorted for a stable comma list; entries never contain commas
        return ",".join(sorted(self.values))


MatchRule = Union[Unset, AnyOf]


def parse_match_spec(spec: str) -> MatchRule:
    """`"unset"` selects the Unset rule; any other string is a comma list of values."""
    if spec.strip() == UNSET_SPEC:
        return Unset()
    return AnyOf.from_spec(spec)


def should_show(key: str, rule: MatchRule, view: RegistryView) -> bool:
    if isinstance(rule, Unset):
        return not view.has_value(key)
    return view.matches_values(key, rule.spec)
