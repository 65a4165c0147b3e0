"""Tests for apibook.routing."""

from __future__ import annotations

import pytest

from apibook.models import Kind
from apibook.routing import RoutingError, route_for, routed_kinds


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (Kind.CLASS, "api/Driver.md"),
        (Kind.MODULE, "api/Driver.md"),
        (Kind.FUNCTION, "api/Functions.md"),
        (Kind.INTERFACE, "api/Interfaces.md"),
        (Kind.TYPE_ALIAS, "api/Interfaces.md"),
        (Kind.ENUMERATION, "api/Interfaces.md"),
    ],
)
def test_route_for_follows_book_layout(kind: Kind, expected: str) -> None:
    assert route_for(kind, "Driver") == expected
    assert route_for(kind, "Driver") == route_for(kind, "Driver")


def test_route_for_rejects_unrouted_kinds() -> None:
    with pytest.raises(RoutingError):
        route_for(Kind.METHOD, "click")


def test_routed_kinds_matches_the_table() -> None:
    assert routed_kinds() == {
        Kind.CLASS,
        Kind.MODULE,
        Kind.FUNCTION,
        Kind.INTERFACE,
        Kind.TYPE_ALIAS,
        Kind.ENUMERATION,
    }
