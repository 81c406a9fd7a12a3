"""Routing — ordered route table with first-match-wins dispatch.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""

from perch.routing.route import PathSegment, Route, RouteMatch, RouteNotFound
from perch.routing.router import Router

__all__ = [
    "PathSegment",
    "Route",
    "RouteMatch",
    "RouteNotFound",
    "Router",
]
