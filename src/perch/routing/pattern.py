"""Route pattern parsing and request path splitting.

Patterns and request paths are split by the same rule, so a pattern
segment and a path segment at the same index always line up.
"""

import re

from perch.errors import MalformedPattern
from perch.routing.route import PathSegment

_PARAM_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def split_path(path: str) -> list[str]:
    """Split a path into segments.

    Exactly one leading ``/`` is dropped. No trailing-slash normalization
    happens, so a trailing slash yields an empty final segment::

        "/"          -> []
        "/42"        -> ["42"]
        "/42/"       -> ["42", ""]
        "/login/42"  -> ["login", "42"]
    """
    if path.startswith("/"):
        path = path[1:]
    if not path:
        return []
    return path.split("/")


def _capture_name(part: str) -> str | None:
    """Return the capture name for ``{name}`` or ``:name``, else ``None``."""
    if part.startswith("{") and part.endswith("}"):
        return part[1:-1]
    if part.startswith(":"):
        return part[1:]
    return None


def parse_path(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern into segments.

    Examples::

        "/"            -> ()
        "/{id}"        -> (PathSegment("{id}", is_param=True, param_name="id"),)
        "/login/:id"   -> (PathSegment("login"), PathSegment(":id", is_param=True, ...))

    Raises ``MalformedPattern`` for duplicate, empty or non-identifier
    capture names, and for Flask-style ``<param>`` segments.
    """
    segments: list[PathSegment] = []
    seen: set[str] = set()

    for part in split_path(pattern):
        if part.startswith("<") and part.endswith(">"):
            msg = f"use {{param}} or :param for captures, not <param> (got {part!r})"
            raise MalformedPattern(pattern, msg)

        name = _capture_name(part)
        if name is None:
            segments.append(PathSegment(value=part))
            continue

        if not name:
            raise MalformedPattern(pattern, "capture segment has no name")
        if not _PARAM_NAME.match(name):
            raise MalformedPattern(pattern, f"capture name {name!r} is not an identifier")
        if name in seen:
            raise MalformedPattern(pattern, f"duplicate capture name {name!r}")
        seen.add(name)
        segments.append(PathSegment(value=part, is_param=True, param_name=name))

    return tuple(segments)
