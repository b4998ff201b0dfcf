"""Test utilities for switchyard routers.

    from switchyard.testing import TestClient
"""

from switchyard.testing.client import TestClient, encode_multipart

__all__ = ["TestClient", "encode_multipart"]
