from __future__ import annotations

import pytest

from bindings.declarations import (
    ChoiceDeclaration,
    ChooseDeclaration,
    DeclarationError,
    parse_declaration,
)
from engine.visibility import AnyOf, Unset


def test_parse_choose_ignores_presentational_attributes():
    decl = parse_declaration("choose", '{"option": "plan", "value": "pro", "color": "green"}')
    assert decl == ChooseDeclaration(option="plan", value="pro")


def test_parse_choice_with_value_list():
    decl = parse_declaration("choice", '{"option": "region", "value": "us, eu", "lazy": true}')
    assert isinstance(decl, ChoiceDeclaration)
    assert decl.lazy is True
    assert decl.match_rule() == AnyOf(frozenset({"us", "eu"}))


def test_parse_choice_unset_flag_and_match_spec_alias():
    assert parse_declaration("choice", {"option": "plan", "unset": True}).match_rule() == Unset()
    assert parse_declaration("choice", {"key": "plan", "matchSpec": "unset"}).match_rule() == Unset()


@pytest.mark.parametrize(
    "kind,raw",
    [
        ("choice", '{"option": "plan"}'),
        ("choose", '{"option": "plan"}'),
        ("choose", '{"option": "", "value": "x"}'),
        ("choice", "{not json"),
        ("choice", "[1, 2]"),
        ("grid", '{"columns": 2}'),
    ],
)
def test_invalid_declarations_raise(kind, raw):
    with pytest.raises(DeclarationError):
        parse_declaration(kind, raw)
