from unittest.mock import patch

import pytest
from django.db import OperationalError

pytestmark = pytest.mark.integration


class TestHealthCheck:
    def test_returns_200_and_healthy(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["services"]["database"]["status"] == "up"
        assert "timestamp" in data

    def test_requires_no_api_key(self, client):
        assert client.get("/health").status_code == 200

    def test_returns_503_when_database_down(self, client):
        with patch(
            "django.db.backends.base.base.BaseDatabaseWrapper.ensure_connection",
            side_effect=OperationalError("down"),
        ):
            response = client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["services"]["database"]["status"] == "down"
