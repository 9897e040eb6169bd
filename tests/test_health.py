"""
Tests for health endpoints.
"""


class TestHealthChecks:

    def test_basic_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_detailed_health_check(self, client):
        response = client.get("/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["checks"]["database"]["status"] == "healthy"

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
