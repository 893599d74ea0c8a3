"""Test utilities for gower applications::

    from gower.testing import TestClient
"""

from gower.testing.client import TestClient

__all__ = ["TestClient"]
