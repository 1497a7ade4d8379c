"""Testing utilities for waypost routers."""

from waypost.testing.client import TestClient

__all__ = ["TestClient"]
