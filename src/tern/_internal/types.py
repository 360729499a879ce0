"""Shared type aliases used across tern modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: (sink, request_view) -> Outcome | None
Handler: TypeAlias = Callable[..., Any]

# Interceptor: (sink, request) -> Outcome | None
Interceptor: TypeAlias = Callable[..., Any]
