"""
Tests for the application shell: health checks, headers and error shapes.
"""


class TestApp:
    def test_root_and_health(self, client):
        assert client.get("/").status_code == 200
        assert client.get("/health").json() == {"status": "healthy"}

    def test_security_headers(self, client):
        response = client.get("/api/services")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "no-store" in response.headers["Cache-Control"]

    def test_health_is_excluded_from_security_headers(self, client):
        assert "X-Frame-Options" not in client.get("/health").headers

    def test_validation_errors_are_422(self, client):
        response = client.post("/api/appointments", json={"customerId": "abc"})

        assert response.status_code == 422
        assert isinstance(response.json()["detail"], list)
