"""Routing: path patterns, the route table, and the sub-router tree."""

from switchyard.routing.pattern import Pattern, compile_pattern, join_path, match_path, slice_path
from switchyard.routing.route import ANY_METHOD, Endpoint, Route, RouteMatch
from switchyard.routing.router import Router, new

__all__ = [
    "ANY_METHOD",
    "Endpoint",
    "Pattern",
    "Route",
    "RouteMatch",
    "Router",
    "compile_pattern",
    "join_path",
    "match_path",
    "new",
    "slice_path",
]
