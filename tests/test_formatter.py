"""Tests for apibook.formatter."""

from __future__ import annotations

import logging

import pytest

from apibook.formatter import format_type
from apibook.models import (
    ArrayType,
    IntrinsicType,
    ReferenceType,
    ReflectionNode,
    ReflectionType,
    StringLiteralType,
    UnionType,
    UnknownType,
    parse_type,
)


def _literal(**declaration: object) -> ReflectionType:
    payload = {"name": "__type", "kindString": "Type literal", **declaration}
    return ReflectionType(ReflectionNode.from_dict(payload))


def test_scalar_types_render_verbatim() -> None:
    assert format_type(IntrinsicType("string")) == "string"
    assert format_type(StringLiteralType("left")) == "left"


def test_array_appends_brackets() -> None:
    element = UnionType((IntrinsicType("string"), ReferenceType("Locator")))
    assert format_type(ArrayType(element)) == format_type(element) + "[]"
    assert format_type(ArrayType(element)) == "string|[Locator][]"


def test_union_preserves_declared_order() -> None:
    union = UnionType((StringLiteralType("b"), StringLiteralType("a"), IntrinsicType("null")))
    assert format_type(union) == "b|a|null"


def test_promise_wraps_all_type_arguments() -> None:
    promise = ReferenceType("Promise", (IntrinsicType("string"), ReferenceType("Element")))
    assert format_type(promise) == "[Promise]<string|[Element]>"


def test_other_references_are_bracketed() -> None:
    assert format_type(ReferenceType("Widget")) == "[Widget]"


def test_type_literal_children_render_as_compact_literal() -> None:
    literal = _literal(
        children=[
            {"name": "x", "kindString": "Variable", "type": {"type": "intrinsic", "name": "number"}},
            {"name": "y", "kindString": "Variable", "type": {"type": "reference", "name": "Point"}},
            {"name": "x", "kindString": "Variable", "type": {"type": "intrinsic", "name": "string"}},
        ]
    )
    assert format_type(literal) == '{"x":"string","y":"[Point]"}'


def test_type_literal_signature_renders_return_type() -> None:
    literal = _literal(
        signatures=[
            {
                "name": "__call",
                "kindString": "Call signature",
                "type": {"type": "reference", "name": "Promise", "typeArguments": [{"type": "intrinsic", "name": "void"}]},
            }
        ]
    )
    assert format_type(literal) == "[Promise]<void>"


def test_empty_type_literal_logs_and_returns_empty(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="apibook"):
        assert format_type(_literal()) == ""
    assert "neither children nor signatures" in caplog.text


def test_unknown_type_logs_and_returns_empty(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="apibook"):
        assert format_type(UnknownType("tuple")) == ""
    assert "tuple" in caplog.text


def test_formatting_is_repeatable() -> None:
    expression = parse_type(
        {
            "type": "union",
            "types": [
                {"type": "array", "elementType": {"type": "reference", "name": "Key"}},
                {"type": "stringLiteral", "value": "Enter"},
            ],
        }
    )
    first = format_type(expression)
    assert format_type(expression) == first == "[Key][]|Enter"
