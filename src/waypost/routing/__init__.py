"""Routing — path templates compiled into an ordered, first-match-wins table.

Routes are registered during setup and the table is frozen before the
router serves requests.
"""

from waypost.routing.declarations import (
    CANONICAL_METHODS,
    ControllerAction,
    RouteDeclaration,
    collect_routes,
    route,
    route_group,
)
from waypost.routing.pattern import PathPattern, compile_pattern, join_path, normalize_path
from waypost.routing.route import RouteEntry, RouteMatch
from waypost.routing.table import RouteTable

__all__ = [
    "CANONICAL_METHODS",
    "ControllerAction",
    "PathPattern",
    "RouteDeclaration",
    "RouteEntry",
    "RouteMatch",
    "RouteTable",
    "collect_routes",
    "compile_pattern",
    "join_path",
    "normalize_path",
    "route",
    "route_group",
]
