"""Render type expressions into the single-line form used in parameter lines."""

from __future__ import annotations

import json
from typing import Dict

from .logging import get_logger
from .models import (
    ArrayType,
    IntrinsicType,
    Kind,
    ReferenceType,
    ReflectionNode,
    ReflectionType,
    StringLiteralType,
    TypeExpression,
    UnionType,
    UnknownType,
)

_logger = get_logger("formatter")

PROMISE = "Promise"


def format_type(expression: TypeExpression) -> str:
    """Return the display string for ``expression``.

    Named references come out bracketed (``[Driver]``) so that the
    surrounding document picks them up as reference tokens.
    """
    if isinstance(expression, IntrinsicType):
        return expression.name
    if isinstance(expression, StringLiteralType):
        return expression.value
    if isinstance(expression, ArrayType):
        return f"{format_type(expression.element_type)}[]"
    if isinstance(expression, UnionType):
        return "|".join(format_type(item) for item in expression.types)
    if isinstance(expression, ReflectionType):
        return format_declaration(expression.declaration)
    if isinstance(expression, ReferenceType):
        if expression.name == PROMISE:
            arguments = "|".join(format_type(arg) for arg in expression.type_arguments)
            return f"[{PROMISE}]<{arguments}>"
        return f"[{expression.name}]"
    if isinstance(expression, UnknownType):
        _logger.error("Found unknown type: %r", expression.tag)
        return ""
    _logger.error("Cannot format %r", expression)
    return ""


def format_declaration(declaration: ReflectionNode) -> str:
    """Render an inline ``Type literal`` as a compact structural literal."""
    if declaration.kind is not Kind.TYPE_LITERAL:
        _logger.error(
            "Inline declaration %r is a %r, not a type literal",
            declaration.name,
            declaration.kind_string,
        )
        return ""
    if declaration.children:
        fields: Dict[str, str] = {}
        for child in declaration.children:
            fields[child.name] = format_type(child.type) if child.type is not None else ""
        return json.dumps(fields, separators=(",", ":"), ensure_ascii=False)
    if declaration.signatures:
        signature = declaration.signatures[0]
        return format_type(signature.type) if signature.type is not None else ""
    _logger.error("Type literal %r has neither children nor signatures", declaration.name)
    return ""


__all__ = ["format_declaration", "format_type"]
