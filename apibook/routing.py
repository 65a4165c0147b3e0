"""Map documented entities to their output files inside the book."""

from __future__ import annotations

from typing import Callable, Dict

from .models import Kind

API_DIR = "api"
FUNCTIONS_FILE = f"{API_DIR}/Functions.md"
INTERFACES_FILE = f"{API_DIR}/Interfaces.md"
ENUMERATIONS_FILE = "Enumerations.md"
SUMMARY_FILE = "SUMMARY.md"


class RoutingError(ValueError):
    """Raised when an entity kind has no place in the book."""


def _own_file(name: str) -> str:
    return f"{API_DIR}/{name}.md"


_ROUTES: Dict[Kind, Callable[[str], str]] = {
    Kind.CLASS: _own_file,
    Kind.MODULE: _own_file,
    Kind.FUNCTION: lambda name: FUNCTIONS_FILE,
    Kind.INTERFACE: lambda name: INTERFACES_FILE,
    Kind.TYPE_ALIAS: lambda name: INTERFACES_FILE,
    Kind.ENUMERATION: lambda name: INTERFACES_FILE,
}


def route_for(kind: Kind, name: str) -> str:
    """Return the book-relative path documenting entity ``name`` of ``kind``."""
    try:
        route = _ROUTES[kind]
    except KeyError:
        raise RoutingError(f"No output file for {kind.value!r} {name!r}") from None
    return route(name)


def routed_kinds() -> frozenset[Kind]:
    return frozenset(_ROUTES)


__all__ = [
    "ENUMERATIONS_FILE",
    "FUNCTIONS_FILE",
    "INTERFACES_FILE",
    "RoutingError",
    "SUMMARY_FILE",
    "route_for",
    "routed_kinds",
]
