"""Shared type aliases used across perch modules."""

from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

# Route handler, called as handler(request_context, path_params)
Handler: TypeAlias = Callable[[Any, Mapping[str, str]], Any]

# Error handler: receives (request, error?) and returns a response value
ErrorHandler: TypeAlias = Callable[..., Any]
