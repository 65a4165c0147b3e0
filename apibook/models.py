"""Reflection tree and type-expression models consumed by the compiler."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


class ReflectionError(ValueError):
    """Raised when the reflection tree lacks data its node kinds require."""


class MissingModuleError(ReflectionError):
    """Raised when the sentinel top-level module is absent."""


class Kind(Enum):
    """Every node kind the compiler distinguishes."""

    MODULE = "Module"
    CLASS = "Class"
    INTERFACE = "Interface"
    FUNCTION = "Function"
    ENUMERATION = "Enumeration"
    ENUMERATION_MEMBER = "Enumeration member"
    TYPE_ALIAS = "Type alias"
    METHOD = "Method"
    PROPERTY = "Property"
    CALL_SIGNATURE = "Call signature"
    VARIABLE = "Variable"
    TYPE_LITERAL = "Type literal"
    PARAMETER = "Parameter"
    OTHER = "*"

    @classmethod
    def parse(cls, text: Optional[str]) -> "Kind":
        try:
            return cls(text)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class IntrinsicType:
    name: str


@dataclass(frozen=True)
class ReferenceType:
    name: str
    type_arguments: Tuple["TypeExpression", ...] = ()


@dataclass(frozen=True)
class StringLiteralType:
    value: str


@dataclass(frozen=True)
class ArrayType:
    element_type: "TypeExpression"


@dataclass(frozen=True)
class UnionType:
    types: Tuple["TypeExpression", ...]


@dataclass(frozen=True)
class ReflectionType:
    """An inline structural type; ``declaration`` is usually a ``Type literal``."""

    declaration: "ReflectionNode"


@dataclass(frozen=True)
class UnknownType:
    """A type tag the formatter has no rendering for."""

    tag: str


TypeExpression = Union[
    IntrinsicType,
    ReferenceType,
    StringLiteralType,
    ArrayType,
    UnionType,
    ReflectionType,
    UnknownType,
]


@dataclass(frozen=True)
class Comment:
    short_text: str = ""
    text: str = ""


@dataclass(frozen=True)
class Flags:
    is_optional: bool = False


@dataclass(eq=False)
class ReflectionNode:
    """A single node of the reflection tree.

    Only ``name`` and ``kind`` are always meaningful; which of the remaining
    fields carry data depends on the kind.
    """

    name: str
    kind: Kind
    kind_string: str = ""
    comment: Optional[Comment] = None
    children: List["ReflectionNode"] = field(default_factory=list)
    signatures: List["ReflectionNode"] = field(default_factory=list)
    parameters: List["ReflectionNode"] = field(default_factory=list)
    type: Optional[TypeExpression] = None
    flags: Flags = field(default_factory=Flags)
    default_value: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReflectionNode":
        if not isinstance(data, Mapping):
            raise ReflectionError(f"Expected a reflection object, got {type(data).__name__}")
        name = data.get("name")
        if not isinstance(name, str):
            raise ReflectionError(f"Reflection node without a name: {_describe(data)}")
        kind_string = data.get("kindString") or ""
        raw_type = data.get("type")
        flags = data.get("flags") or {}
        default_value = data.get("defaultValue")
        return cls(
            name=name,
            kind=Kind.parse(kind_string),
            kind_string=kind_string,
            comment=_parse_comment(data.get("comment")),
            children=[cls.from_dict(child) for child in data.get("children") or []],
            signatures=[cls.from_dict(sig) for sig in data.get("signatures") or []],
            parameters=[cls.from_dict(param) for param in data.get("parameters") or []],
            type=parse_type(raw_type) if raw_type is not None else None,
            flags=Flags(is_optional=flags.get("isOptional") is True),
            default_value=str(default_value) if default_value is not None else None,
        )

    def children_of(self, kind: Kind) -> List["ReflectionNode"]:
        return [child for child in self.children if child.kind is kind]

    def require_signatures(self) -> List["ReflectionNode"]:
        if not self.signatures:
            raise ReflectionError(f"{self.kind_string} {self.name!r} has no call signatures")
        return self.signatures


def parse_type(data: Mapping[str, Any]) -> TypeExpression:
    """Build a type expression from its JSON form, dispatching on the ``type`` tag."""
    if not isinstance(data, Mapping):
        raise ReflectionError(f"Expected a type object, got {type(data).__name__}")
    tag = data.get("type")
    if tag == "intrinsic":
        return IntrinsicType(name=_require(data, "name", tag))
    if tag == "reference":
        arguments = tuple(parse_type(arg) for arg in data.get("typeArguments") or [])
        return ReferenceType(name=_require(data, "name", tag), type_arguments=arguments)
    if tag == "stringLiteral":
        return StringLiteralType(value=_require(data, "value", tag))
    if tag == "array":
        return ArrayType(element_type=parse_type(_require(data, "elementType", tag)))
    if tag == "union":
        return UnionType(types=tuple(parse_type(item) for item in data.get("types") or []))
    if tag == "reflection":
        return ReflectionType(declaration=ReflectionNode.from_dict(_require(data, "declaration", tag)))
    return UnknownType(tag=str(tag))


def comment_text(node: ReflectionNode) -> str:
    """Join the short and long comment text, skipping empty parts."""
    if node.comment is None:
        return ""
    parts = [node.comment.short_text, node.comment.text]
    return "\n\n".join(part for part in parts if part)


def load_reflection(path: Path) -> ReflectionNode:
    """Read the reflection JSON document at ``path``."""
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    return ReflectionNode.from_dict(data)


def find_module(root: ReflectionNode, name: str) -> ReflectionNode:
    """Return the direct child of ``root`` named ``name``."""
    for child in root.children:
        if child.name == name:
            return child
    raise MissingModuleError(f"Top-level module {name} not found in reflection tree")


def _parse_comment(data: Any) -> Optional[Comment]:
    if not isinstance(data, Mapping):
        return None
    return Comment(
        short_text=data.get("shortText") or "",
        text=data.get("text") or "",
    )


def _require(data: Mapping[str, Any], key: str, tag: str) -> Any:
    if key not in data:
        raise ReflectionError(f"Type {tag!r} is missing {key!r}")
    return data[key]


def _describe(data: Mapping[str, Any]) -> str:
    summary: Dict[str, Any] = {key: data[key] for key in ("id", "kindString") if key in data}
    return json.dumps(summary, sort_keys=True)


__all__ = [
    "ArrayType",
    "Comment",
    "Flags",
    "IntrinsicType",
    "Kind",
    "MissingModuleError",
    "ReferenceType",
    "ReflectionError",
    "ReflectionNode",
    "ReflectionType",
    "StringLiteralType",
    "TypeExpression",
    "UnionType",
    "UnknownType",
    "comment_text",
    "find_module",
    "load_reflection",
    "parse_type",
]
