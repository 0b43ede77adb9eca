"""Testing utilities for soffit render endpoints.

Usage::

    from soffit.testing import TestClient

    async with TestClient(app) as client:
        response = await client.render("weather", payload_json)
        assert response.status == 200
"""

from soffit.testing.client import TestClient

__all__ = ["TestClient"]
