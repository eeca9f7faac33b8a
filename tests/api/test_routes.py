"""Tests for the HTTP API."""

import re

import pytest
from fastapi.testclient import TestClient

from scanlink.core.config import settings

CHROME_MOBILE = "Mozilla/5.0 (Linux; Android 14) AppleWebKit/537.36 Chrome/120.0 Mobile Safari/537.36"


def create_link(client, url="https://example.com/landing", **extra):
    response = client.post("/api/create", json={"url": url, **extra})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.api
class TestCreateEndpoint:

    def test_create(self, client):
        body = create_link(client)

        assert body["success"] is True
        assert re.fullmatch(r"[0-9A-Za-z]{8}", body["shortId"])
        assert body["trackingUrl"] == f"{settings.SHORT_URL_DOMAIN}/r/{body['shortId']}"
        assert body["originalUrl"] == "https://example.com/landing"
        assert body["message"] == "QR code created successfully"

    def test_create_with_style_options(self, client):
        options = {"dotsOptions": {"color": "#000000"}, "width": 256}
        body = create_link(client, styleOptions=options)

        stats = client.get(f"/api/stats/{body['shortId']}").json()
        assert stats["styleOptions"] == options

    def test_missing_url(self, client):
        response = client.post("/api/create", json={})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Valid URL is required"}

    def test_non_string_url(self, client):
        response = client.post("/api/create", json={"url": 12345})

        assert response.status_code == 400
        assert response.json()["error"] == "Valid URL is required"

    def test_invalid_url(self, client):
        response = client.post("/api/create", json={"url": "not a url"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid URL format"}

    def test_malformed_body(self, client):
        response = client.post(
            "/api/create",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_style_options_must_be_an_object(self, client):
        response = client.post("/api/create", json={"url": "https://example.com", "styleOptions": "red"})

        assert response.status_code == 400
        assert response.json()["success"] is False


@pytest.mark.api
class TestRedirectEndpoint:

    def test_redirect(self, client):
        body = create_link(client, url="https://example.com/menu")

        response = client.get(f"/r/{body['shortId']}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/menu"

    @pytest.mark.parametrize("bad_id", ["short", "Abcd123!", "Abcd123456"])
    def test_malformed_id(self, client, bad_id):
        response = client.get(f"/r/{bad_id}", follow_redirects=False)

        assert response.status_code == 400
        assert response.text == "Invalid QR code ID"

    def test_unknown_id(self, client):
        response = client.get("/r/Unknown1", follow_redirects=False)

        assert response.status_code == 404
        assert response.text == "QR code not found"

    def test_scans_are_written_before_shutdown(self, test_app):
        """Pending scan writes are drained when the application stops."""
        with TestClient(test_app) as client:
            short_id = create_link(client)["shortId"]
            for _ in range(3):
                response = client.get(
                    f"/r/{short_id}",
                    headers={"User-Agent": CHROME_MOBILE},
                    follow_redirects=False,
                )
                assert response.status_code == 302

        with TestClient(test_app) as client:
            stats = client.get(f"/api/stats/{short_id}").json()

        assert stats["totalScans"] == 3
        assert all(scan["userAgent"] == CHROME_MOBILE for scan in stats["scans"])


@pytest.mark.api
class TestStatsEndpoints:

    def test_stats(self, client):
        body = create_link(client)

        response = client.get(f"/api/stats/{body['shortId']}")

        assert response.status_code == 200
        stats = response.json()
        assert stats["success"] is True
        assert stats["id"] == body["shortId"]
        assert stats["originalUrl"] == "https://example.com/landing"
        assert stats["styleOptions"] == {}
        assert stats["createdAt"]
        assert stats["totalScans"] == 0
        assert stats["uniqueScans"] == 0
        assert stats["scans"] == []

    def test_stats_unknown(self, client):
        response = client.get("/api/stats/Unknown1")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "QR code not found"}

    def test_stats_are_idempotent(self, client):
        short_id = create_link(client)["shortId"]

        first = client.get(f"/api/stats/{short_id}").json()
        second = client.get(f"/api/stats/{short_id}").json()

        assert first == second

    def test_report(self, client):
        short_id = create_link(client)["shortId"]

        response = client.get(f"/api/stats/{short_id}/report")

        assert response.status_code == 200
        report = response.json()
        assert report["success"] is True
        assert report["id"] == short_id
        assert report["totalScans"] == 0
        assert report["scansByDate"] == []
        assert report["recentScans"] == []

    def test_report_unknown(self, client):
        response = client.get("/api/stats/Unknown1/report")

        assert response.status_code == 404
        assert response.json()["error"] == "QR code not found"


@pytest.mark.api
class TestListEndpoint:

    def test_list(self, client):
        first = create_link(client, url="https://one.example")
        second = create_link(client, url="https://two.example")

        response = client.get("/api/list")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 2
        assert [item["id"] for item in body["qrCodes"]] == [second["shortId"], first["shortId"]]
        assert body["qrCodes"][0]["originalUrl"] == "https://two.example"
        assert body["qrCodes"][0]["scanCount"] == 0
        assert "createdAt" in body["qrCodes"][0]

    def test_list_limit(self, client):
        for _ in range(3):
            create_link(client)

        assert client.get("/api/list?limit=2").json()["count"] == 2

    @pytest.mark.parametrize("limit", ["abc", "0", "-5", ""])
    def test_unusable_limit_falls_back_to_default(self, client, limit):
        for _ in range(3):
            create_link(client)

        response = client.get(f"/api/list?limit={limit}")

        assert response.status_code == 200
        assert response.json()["count"] == 3

    def test_list_empty(self, client):
        assert client.get("/api/list").json() == {"success": True, "count": 0, "qrCodes": []}


@pytest.mark.api
class TestHealthAndMiddleware:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["components"]["storage"]["status"] == "healthy"
        assert body["uptime"] >= 0

    def test_liveness(self, client):
        assert client.get("/health/live").json()["status"] == "alive"

    def test_readiness(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_request_id_header(self, client):
        response = client.get("/health/live", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

        generated = client.get("/health/live")
        assert generated.headers["X-Request-ID"]

    def test_unknown_route(self, client):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json()["success"] is False
