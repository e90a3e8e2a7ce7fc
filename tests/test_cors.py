"""
CORS Middleware Tests

Tests for the allow-list CORS middleware: origin resolution, the debug
headers and preflight handling.

Test Categories:
1. TestResolveOrigin - allow-list and *.vercel.app matching
2. TestCorsHeaders - header values
3. TestCorsMiddleware - headers on real responses
"""

import pytest

from hcailt.middleware.cors import cors_headers, is_origin_allowed, resolve_origin


ALLOWED = ["https://hcailt.awordz.com", "http://localhost:5173"]


class TestResolveOrigin:
    """Tests for resolve_origin() and is_origin_allowed()."""

    def test_listed_origin_echoed(self):
        assert resolve_origin("http://localhost:5173", ALLOWED) == "http://localhost:5173"

    def test_vercel_preview_allowed(self):
        origin = "https://hcailt-git-feature-x.vercel.app"
        assert is_origin_allowed(origin, ALLOWED)
        assert resolve_origin(origin, ALLOWED) == origin

    @pytest.mark.parametrize(
        "origin",
        ["https://evil.example.com", "http://localhost:3000", "", None],
    )
    def test_unknown_origin_falls_back_to_first(self, origin):
        assert resolve_origin(origin, ALLOWED) == "https://hcailt.awordz.com"

    def test_vercel_suffix_must_be_exact(self):
        assert not is_origin_allowed("https://vercel.app.evil.com", ALLOWED)

    def test_empty_allow_list(self):
        assert resolve_origin("https://evil.example.com", []) == ""
        assert resolve_origin("https://x.vercel.app", []) == "https://x.vercel.app"


class TestCorsHeaders:
    """Tests for cors_headers()."""

    def test_header_values(self):
        headers = cors_headers("http://localhost:5173", ALLOWED)

        assert headers == {
            "Access-Control-Allow-Origin": "http://localhost:5173",
            "Vary": "Origin",
            "X-Debug-Origin": "http://localhost:5173",
            "X-Debug-Allowed": "https://hcailt.awordz.com|http://localhost:5173",
            "Access-Control-Allow-Methods": "POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
        }

    def test_wildcard_when_nothing_resolves(self):
        headers = cors_headers("https://evil.example.com", [])

        assert headers["Access-Control-Allow-Origin"] == "*"
        assert headers["X-Debug-Origin"] == ""
        assert headers["X-Debug-Allowed"] == ""


class TestCorsMiddleware:
    """Tests for the middleware on the application."""

    def test_allowed_origin_on_post(self, test_client):
        response = test_client.post(
            "/translate",
            json={"text": "Hola", "model": "gpt-5.1"},
            headers={"Origin": "http://localhost:5173"},
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert response.headers["vary"] == "Origin"
        assert response.headers["x-debug-allowed"] == (
            "https://hcailt.awordz.com|http://localhost:5173"
        )

    def test_unknown_origin_gets_first_configured(self, test_client):
        response = test_client.options(
            "/translate", headers={"Origin": "https://evil.example.com"}
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://hcailt.awordz.com"
        assert response.headers["x-debug-origin"] == "https://hcailt.awordz.com"

    def test_vercel_origin_on_preflight(self, test_client):
        origin = "https://hcailt-preview.vercel.app"

        response = test_client.options("/api/qe", headers={"Origin": origin})

        assert response.headers["access-control-allow-origin"] == origin
        assert response.headers["access-control-allow-headers"] == "Content-Type"

    def test_headers_on_validation_error(self, test_client):
        response = test_client.post(
            "/translate", json={}, headers={"Origin": "http://localhost:5173"}
        )

        assert response.status_code == 400
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
