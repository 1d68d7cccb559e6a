"""Test utilities for quest applications::

    from quest.testing import TestClient
"""

from quest.testing.client import TestClient

__all__ = ["TestClient"]
