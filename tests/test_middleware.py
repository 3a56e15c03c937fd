# =============================================================================
# DOG ADOPTION PLATFORM API - MIDDLEWARE & PLATFORM TESTS
# =============================================================================
# File: tests/test_middleware.py
# Description: Rate limiting, CORS, security headers, health and fallbacks
# =============================================================================

from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionFailure


RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again after 15 minutes"


class TestRateLimiter:
    """Test suite for RateLimiterMiddleware."""

    def test_headers_count_down(self, make_client):
        client = make_client(rate_limit_max_requests=3)

        remaining = [
            client.get("/api/health").headers["X-RateLimit-Remaining"]
            for _ in range(3)
        ]

        assert remaining == ["2", "1", "0"]

    def test_limit_exceeded(self, make_client):
        # Arrange
        client = make_client(rate_limit_max_requests=3)
        for _ in range(3):
            assert client.get("/api/health").status_code == 200

        # Act
        response = client.get("/api/health")

        # Assert
        assert response.status_code == 429
        assert response.json() == {"success": False, "message": RATE_LIMIT_MESSAGE}
        assert response.headers["X-RateLimit-Limit"] == "3"
        assert response.headers["X-RateLimit-Remaining"] == "0"
        assert 0 < int(response.headers["Retry-After"]) <= 900

    def test_limit_applies_across_routes(self, make_client):
        client = make_client(rate_limit_max_requests=2)
        client.get("/api/health")
        client.post("/api/auth/login", json={"username": "x", "password": "y"})

        response = client.get("/")

        assert response.status_code == 429

    def test_limit_is_per_client_ip(self, make_client):
        client = make_client(rate_limit_max_requests=1)
        client.get("/api/health", headers={"X-Forwarded-For": "10.0.0.1"})

        blocked = client.get("/api/health", headers={"X-Forwarded-For": "10.0.0.1"})
        other = client.get("/api/health", headers={"X-Forwarded-For": "10.0.0.2, 10.0.0.9"})

        assert blocked.status_code == 429
        assert other.status_code == 200

    def test_fails_open_when_redis_errors(self, make_client, monkeypatch):
        client = make_client(rate_limit_max_requests=1)
        redis = client.app.state.context.redis

        async def broken(*args, **kwargs):
            raise RedisConnectionFailure("connection refused")

        monkeypatch.setattr(redis, "incr_window", broken)

        responses = [client.get("/api/health") for _ in range(3)]

        assert all(r.status_code == 200 for r in responses)
        assert "X-RateLimit-Limit" not in responses[0].headers

    def test_disabled(self, make_client):
        client = make_client(rate_limit_enabled=False, rate_limit_max_requests=1)

        responses = [client.get("/api/health") for _ in range(3)]

        assert all(r.status_code == 200 for r in responses)


class TestCors:
    """Test suite for CORS configuration."""

    def test_preflight(self, test_client: TestClient):
        response = test_client.options(
            "/api/dogs",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "PUT",
                "Access-Control-Request-Headers": "Authorization, Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] in ("*", "http://example.com")
        assert "PUT" in response.headers["access-control-allow-methods"]
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_simple_request(self, test_client: TestClient):
        response = test_client.get("/api/health", headers={"Origin": "http://example.com"})

        assert "access-control-allow-origin" in response.headers

    def test_configured_origins(self, make_client):
        client = make_client(cors_origins="http://allowed.test")

        allowed = client.get("/api/health", headers={"Origin": "http://allowed.test"})
        denied = client.get("/api/health", headers={"Origin": "http://evil.test"})

        assert allowed.headers["access-control-allow-origin"] == "http://allowed.test"
        assert "access-control-allow-origin" not in denied.headers


class TestSecurityHeaders:
    """Test suite for SecurityHeadersMiddleware and RequestIDMiddleware."""

    def test_headers_present(self, test_client: TestClient):
        response = test_client.get("/api/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "Content-Security-Policy" in response.headers
        assert "Strict-Transport-Security" not in response.headers

    def test_hsts_in_production(self, make_client):
        client = make_client(app_env="production")

        response = client.get("/api/health")

        assert "Strict-Transport-Security" in response.headers

    def test_request_id_generated(self, test_client: TestClient):
        response = test_client.get("/api/health")

        assert response.headers["X-Request-ID"]

    def test_request_id_propagated(self, test_client: TestClient):
        response = test_client.get("/api/health", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"


class TestPlatformEndpoints:
    """Health, root and fallback handlers."""

    def test_health(self, test_client: TestClient):
        response = test_client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Dog Adoption Platform API is running"
        assert body["data"]["timestamp"]

    def test_readiness(self, test_client: TestClient):
        response = test_client.get("/api/health/ready")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "healthy"
        assert data["components"]["database"]["status"] == "healthy"
        assert data["components"]["redis"]["status"] == "healthy"

    def test_root(self, test_client: TestClient):
        response = test_client.get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Welcome to Dog Adoption Platform API"
        assert body["version"] == "1.0.0"
        assert body["endpoints"] == {
            "auth": "/api/auth",
            "dogs": "/api/dogs",
            "health": "/api/health",
        }

    def test_unknown_route(self, test_client: TestClient):
        response = test_client.get("/api/cats")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_unhandled_error_is_generic(self, make_client):
        client = make_client(rate_limit_enabled=False)
        client.app.router.add_api_route("/api/boom", _boom)
        quiet = TestClient(client.app, raise_server_exceptions=False)

        response = quiet.get("/api/boom")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal server error"}


async def _boom():
    raise RuntimeError("secret internal detail")
