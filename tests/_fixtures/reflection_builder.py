"""Helpers for constructing reflection JSON trees in tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

MODULE_NAME = '"index.d"'


def intrinsic(name: str) -> Dict[str, Any]:
    return {"type": "intrinsic", "name": name}


def reference(name: str, *arguments: Dict[str, Any]) -> Dict[str, Any]:
    data: Dict[str, Any] = {"type": "reference", "name": name}
    if arguments:
        data["typeArguments"] = list(arguments)
    return data


def param(
    name: str,
    type_: Dict[str, Any],
    *,
    optional: bool = False,
    comment: Optional[str] = None,
) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "name": name,
        "kindString": "Parameter",
        "flags": {"isOptional": True} if optional else {},
        "type": type_,
    }
    if comment:
        data["comment"] = {"text": comment}
    return data


def signature(
    name: str,
    parameters: Optional[List[Dict[str, Any]]] = None,
    *,
    returns: Optional[Dict[str, Any]] = None,
    comment: Optional[str] = None,
) -> Dict[str, Any]:
    data: Dict[str, Any] = {"name": name, "kindString": "Call signature", "parameters": list(parameters or [])}
    if returns is not None:
        data["type"] = returns
    if comment:
        data["comment"] = {"shortText": comment}
    return data


def function(name: str, *signatures: Dict[str, Any]) -> Dict[str, Any]:
    return {"name": name, "kindString": "Function", "signatures": list(signatures)}


def method(name: str, *signatures: Dict[str, Any]) -> Dict[str, Any]:
    return {"name": name, "kindString": "Method", "signatures": list(signatures)}


def prop(name: str, type_: Dict[str, Any], *, optional: bool = False, comment: Optional[str] = None) -> Dict[str, Any]:
    data = param(name, type_, optional=optional, comment=comment)
    data["kindString"] = "Property"
    return data


def entity(kind: str, name: str, *children: Dict[str, Any], comment: Optional[str] = None) -> Dict[str, Any]:
    data: Dict[str, Any] = {"name": name, "kindString": kind, "children": list(children)}
    if comment:
        data["comment"] = {"shortText": comment}
    return data


def member(name: str, default: Optional[str] = None, comment: Optional[str] = None) -> Dict[str, Any]:
    data: Dict[str, Any] = {"name": name, "kindString": "Enumeration member", "flags": {}}
    if default is not None:
        data["defaultValue"] = default
    if comment:
        data["comment"] = {"shortText": comment}
    return data


def root(*children: Dict[str, Any], module_name: str = MODULE_NAME) -> Dict[str, Any]:
    """Wrap ``children`` in the sentinel module under a project root node."""
    return {
        "name": "browser-test",
        "kindString": "",
        "children": [{"name": module_name, "kindString": "External module", "children": list(children)}],
    }


def write_reflection(path: Path, data: Dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


__all__ = [
    "MODULE_NAME",
    "entity",
    "function",
    "intrinsic",
    "member",
    "method",
    "param",
    "prop",
    "reference",
    "root",
    "signature",
    "write_reflection",
]
