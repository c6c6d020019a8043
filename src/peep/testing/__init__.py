"""Test utilities for peep applications.

    from peep.testing import TestClient
"""

from peep.testing.client import TestClient

__all__ = ["TestClient"]
