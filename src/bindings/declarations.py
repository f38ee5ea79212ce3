from __future__ import annotations

import json
from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator

from engine.visibility import MatchRule, Unset, parse_match_spec


class DeclarationError(ValueError):
    """Raised when a block declaration cannot be parsed."""


class _Declaration(BaseModel):
    # color, columns, compact and other presentational attributes are dropped
    model_config = ConfigDict(extra="ignore", frozen=True)

    option: str = Field(min_length=1, validation_alias=AliasChoices("option", "key"))


class ChooseDeclaration(_Declaration):
    """A choosable block: activating it selects `value` for `option`."""

    value: str


class ChoiceDeclaration(_Declaration):
    """
    A conditional block.

    Fields
    - value: comma-separated allowed values, or the literal "unset".
    - unset: shorthand for the Unset rule; takes precedence over `value`.
    - lazy: do not mount until first shown, then keep mounted.
    """

    value: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("value", "matchSpec", "match_spec")
    )
    unset: bool = False
    lazy: bool = False

    @model_validator(mode="after")
    def _require_rule(self) -> "ChoiceDeclaration":
        if not self.unset and self.value is None:
            raise ValueError("either 'value' or 'unset' must be given")
        return self

    def match_rule(self) -> MatchRule:
        if self.unset:
            return Unset()
        return parse_match_spec(self.value or "")


Declaration = Union[ChooseDeclaration, ChoiceDeclaration]

_KINDS = {
    "choose": ChooseDeclaration,
    "trigger": ChooseDeclaration,
    "choice": ChoiceDeclaration,
    "observe": ChoiceDeclaration,
}


def parse_declaration(kind: str, raw: Union[str, dict]) -> Declaration:
    """Parse a block declaration from a JSON attribute payload (or an already-decoded dict).

    `kind` is one of "choose", "trigger", "choice", "observe".
    """
    model = _KINDS.get(kind)
    if model is None:
        raise DeclarationError(f"unknown block kind: {kind!r}")
    try:
        data = json.loads(raw) if isinstance(raw, str) else raw
        return model.model_validate(data)
    except (ValueError, ValidationError) as ex:
        raise DeclarationError(f"invalid {kind} declaration: {ex}") from ex
