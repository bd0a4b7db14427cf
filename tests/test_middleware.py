"""
Cross-cutting HTTP behaviour: health checks, security headers, CORS,
request ids and the error envelope for framework-level failures.
"""

import json
import logging

import pytest

from learnpath import create_app
from learnpath.config import TestingConfig, config
from learnpath.middleware.logging_config import JSONFormatter


# ── Health ───────────────────────────────────────────────────────────────────


class TestHealth:
    def test_health_reports_database(self, client):
        res = client.get("/api/v1/health")
        assert res.status_code == 200
        body = res.get_json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert "uptime" in body and "timestamp" in body

    def test_ready(self, client):
        res = client.get("/api/v1/health/ready")
        assert res.status_code == 200
        assert res.get_json() == {"status": "ok"}

    def test_health_ignores_bad_token(self, client):
        res = client.get("/api/v1/health", headers={"Authorization": "Bearer garbage"})
        assert res.status_code == 200


# ── Headers ──────────────────────────────────────────────────────────────────


class TestResponseHeaders:
    def test_security_headers_present(self, client):
        res = client.get("/api/v1/health/ready")
        assert res.headers["X-Frame-Options"] == "DENY"
        assert res.headers["X-Content-Type-Options"] == "nosniff"
        assert res.headers["Content-Security-Policy"].startswith("default-src 'none'")
        assert res.headers["Referrer-Policy"] == "no-referrer"

    def test_request_id_generated(self, client):
        res = client.get("/api/v1/skills")
        assert res.headers.get("X-Request-ID")
        assert float(res.headers["X-Request-Duration-Ms"]) >= 0

    def test_request_id_echoed(self, client):
        res = client.get("/api/v1/skills", headers={"X-Request-ID": "abc123"})
        assert res.headers["X-Request-ID"] == "abc123"

    def test_cors_allows_frontend_origin(self, app, client):
        origin = app.config["FRONTEND_URL"]
        res = client.get("/api/v1/skills", headers={"Origin": origin})
        assert res.headers["Access-Control-Allow-Origin"] == origin
        assert res.headers["Access-Control-Allow-Credentials"] == "true"

    def test_cors_rejects_other_origin(self, client):
        res = client.get("/api/v1/skills", headers={"Origin": "https://evil.example.com"})
        assert "Access-Control-Allow-Origin" not in res.headers


# ── Error envelope ───────────────────────────────────────────────────────────


class TestErrorEnvelope:
    def test_unknown_route_is_enveloped_404(self, client):
        res = client.get("/api/v1/does-not-exist")
        assert res.status_code == 404
        body = res.get_json()
        assert body["success"] is False
        assert body["error"]["code"] == "NOT_FOUND"

    def test_wrong_method_is_405(self, client):
        res = client.delete("/api/v1/skills")
        assert res.status_code == 405
        assert res.get_json()["error"]["code"] == "METHOD_NOT_ALLOWED"
        assert "GET" in res.headers["Allow"]

    def test_non_json_body_is_415(self, client, pro_user, auth_headers, caplog):
        res = client.post(
            "/api/v1/feedback",
            data="type=bug",
            content_type="application/x-www-form-urlencoded",
            headers=auth_headers(pro_user),
        )
        assert res.status_code == 415
        assert res.get_json()["error"]["code"] == "UNSUPPORTED_MEDIA_TYPE"
        assert res.headers.get("X-Request-ID")
        assert "Client error: POST /api/v1/feedback 415" in caplog.text

    def test_oversized_body_is_413(self, app, client, pro_user, auth_headers):
        payload = {"type": "bug", "category": "other",
                   "content": "x" * (app.config["MAX_CONTENT_LENGTH"] + 1)}
        res = client.post("/api/v1/feedback", json=payload, headers=auth_headers(pro_user))
        assert res.status_code == 413
        assert res.get_json()["error"]["code"] == "PAYLOAD_TOO_LARGE"
        assert float(res.headers["X-Request-Duration-Ms"]) >= 0

    def test_validation_error_lists_fields(self, client, pro_user, auth_headers):
        res = client.post("/api/v1/feedback", json={"type": "nope"}, headers=auth_headers(pro_user))
        assert res.status_code == 422
        error = res.get_json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert {"type", "category", "content"} <= set(error["errors"])

    @pytest.mark.parametrize("body", ["[1, 2]", '"text"'])
    def test_non_object_body_is_400(self, client, pro_user, auth_headers, body):
        res = client.post(
            "/api/v1/feedback", data=body, content_type="application/json",
            headers=auth_headers(pro_user),
        )
        assert res.status_code == 400
        assert res.get_json()["error"]["message"] == "Request body must be a JSON object"


# ── Rate limiting ────────────────────────────────────────────────────────────


class _RateLimitedConfig(TestingConfig):
    RATELIMIT_ENABLED = True


class TestRateLimiting:
    def test_auth_routes_are_limited(self, monkeypatch):
        monkeypatch.setitem(config, "ratelimited", _RateLimitedConfig)
        client = create_app("ratelimited").test_client()

        statuses = [client.get("/api/v1/auth/me").status_code for _ in range(11)]
        assert statuses[0] == 401
        assert statuses[-1] == 429

        res = client.get("/api/v1/auth/me")
        assert res.status_code == 429
        error = res.get_json()["error"]
        assert error["code"] == "RATE_LIMIT_EXCEEDED"
        assert error["message"] == "Too many requests, please try again later"


# ── Logging ──────────────────────────────────────────────────────────────────


def test_json_formatter_keeps_domain_fields():
    record = logging.LogRecord("learnpath.test", logging.INFO, __file__, 1,
                               "Roadmap generated: %d modules", (6,), None)
    record.user_id = 7
    record.roadmap_id = 3
    record.unrelated = "dropped"
    entry = json.loads(JSONFormatter().format(record))
    assert entry["message"] == "Roadmap generated: 6 modules"
    assert entry["user_id"] == 7
    assert entry["roadmap_id"] == 3
    assert "unrelated" not in entry
