"""Test utilities for tern routers::

    from tern.testing import TestClient, route_request
"""

from tern.testing.client import TestClient, route_request

__all__ = [
    "TestClient",
    "route_request",
]
