from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Protocol, Tuple, Union

from engine.registry import ChoiceRegistry
from engine.visibility import AnyOf

from .choice import ChoiceBinding, ObserveBinding
from .choose import ChooseBinding, TriggerBinding
from .declarations import ChoiceDeclaration, ChooseDeclaration, DeclarationError, parse_declaration


class Binding(Protocol):
    def dispose(self) -> None: ...


@dataclass
class PageBindings:
    """All bindings mounted for one page, disposed together."""

    registry: ChoiceRegistry
    bindings: List[Binding] = field(default_factory=list)

    def dispose(self) -> None:
        for binding in self.bindings:
            binding.dispose()
        self.bindings = []


def build_binding(registry: ChoiceRegistry, kind: str, decl: Union[ChooseDeclaration, ChoiceDeclaration]) -> Binding:
    if kind == "choose":
        return ChooseBinding(registry, decl.option, decl.value)
    if kind == "trigger":
        return TriggerBinding(registry, decl.option, decl.value)
    rule = decl.match_rule()
    if kind == "observe":
        if not isinstance(rule, AnyOf):
            raise DeclarationError("observe blocks need a value list, not 'unset'")
        return ObserveBinding(registry, decl.option, rule)
    return ChoiceBinding(registry, decl.option, rule, lazy=decl.lazy)


def mount_declarations(registry: ChoiceRegistry, items: Iterable[Tuple[str, Union[str, dict]]]) -> PageBindings:
    """Create bindings for `(kind, declaration)` pairs, in document order.

    Declarations are usually the JSON payload of a `data-choose` /
    `data-choice` attribute. Raises `DeclarationError` on the first invalid one,
    after disposing whatever was already mounted.
    """
    page = PageBindings(registry=registry)
    try:
        for kind, raw in items:
            decl = parse_declaration(kind, raw)
            page.bindings.append(build_binding(registry, kind, decl))
    except DeclarationError:
        page.dispose()
        raise
    return page
