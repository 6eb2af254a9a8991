"""HTTP tests for the short links service."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from shortlinks.core.exceptions import StoreFailure
from shortlinks.core.store import LinkStore
from shortlinks.main import create_app
from shortlinks.models.link import ShortLink, millis_to_datetime
from shortlinks.utils.slugs import ALPHABET

NOT_FOUND_CACHE_CONTROL = "s-maxage=10000000, stale-while-revalidate"


def parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def shorten(client, url="https://example.com", duration=60000) -> dict:
    response = client.post("/shorten", json={"url": url, "durationMillis": duration})
    assert response.status_code == 201, response.text
    return response.json()


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_check(self, client):
        """Test health check returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestShortenEndpoint:
    """Tests for POST /shorten endpoint."""

    def test_create_success(self, client, clock):
        data = shorten(client, "https://example.com/some/path?q=1", 60000)

        assert data["url"] == "https://example.com/some/path?q=1"
        assert len(data["slug"]) == 7
        assert set(data["slug"]) <= set(ALPHABET)
        assert data["shortUrl"] == f"http://sho.rt/{data['slug']}"
        assert parse_time(data["createdAt"]) == millis_to_datetime(clock.now)
        created = parse_time(data["createdAt"])
        expires = parse_time(data["expiresAt"])
        assert (expires - created).total_seconds() * 1000 == 60000

    def test_create_persists_record(self, client, test_db):
        data = shorten(client)
        assert test_db.get(data["slug"]).url == "https://example.com"

    def test_legacy_expiration_time_field(self, client):
        response = client.post(
            "/shorten", json={"url": "https://example.com", "expirationTime": 5000}
        )
        assert response.status_code == 201

    def test_short_url_defaults_to_request_host(self, test_db, clock):
        from shortlinks.core.config import Settings

        app = create_app(Settings(_env_file=None), store=test_db, clock=clock)
        with TestClient(app) as client:
            data = shorten(client)
        assert data["shortUrl"] == f"http://testserver/{data['slug']}"

    @pytest.mark.parametrize(
        "body",
        [
            {"url": "", "durationMillis": 60000},
            {"url": "   ", "durationMillis": 60000},
            {"durationMillis": 60000},
            {"url": None, "durationMillis": 60000},
            {"url": "https://example.com", "durationMillis": -1},
            {"url": "https://example.com", "durationMillis": 0},
            {"url": "https://example.com", "durationMillis": "60000"},
            {"url": "https://example.com", "durationMillis": True},
            {"url": "https://example.com"},
            {},
        ],
    )
    def test_invalid_body(self, client, test_db, body):
        response = client.post("/shorten", json=body)
        assert response.status_code == 400
        assert response.json()["message"]
        assert test_db.count() == 0

    def test_malformed_json(self, client):
        response = client.post(
            "/shorten",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"message": "request body is not valid JSON"}

    def test_store_failure_is_server_error(self, settings, clock):
        store = MagicMock(spec=LinkStore)
        store.insert.side_effect = StoreFailure()
        app = create_app(settings=settings, store=store, clock=clock)
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.post(
                "/shorten", json={"url": "https://example.com", "durationMillis": 1000}
            )
        assert response.status_code == 500
        assert response.json() == {"message": "internal storage error"}


class TestResolveEndpoint:
    """Tests for GET /resolve/{slug} endpoint."""

    def test_resolve_live(self, client):
        slug = shorten(client)["slug"]

        for _ in range(2):
            response = client.get(f"/resolve/{slug}")
            assert response.status_code == 200
            data = response.json()
            assert data["slug"] == slug
            assert data["url"] == "https://example.com"
            assert "expiresAt" in data
            assert "shortUrl" not in data

    def test_resolve_unknown(self, client):
        response = client.get("/resolve/nothere")
        assert response.status_code == 404
        assert response.json() == {"message": "slug not found"}
        assert response.headers["cache-control"] == NOT_FOUND_CACHE_CONTROL
        assert response.headers["access-control-allow-origin"] == "*"

    def test_resolve_expired(self, client, clock, test_db):
        slug = shorten(client, duration=1000)["slug"]
        clock.advance(1000)

        response = client.get(f"/resolve/{slug}")
        assert response.status_code == 404
        assert response.json() == {"message": "link expired"}
        assert test_db.get(slug) is None

        response = client.get(f"/resolve/{slug}")
        assert response.status_code == 404
        assert response.json() == {"message": "slug not found"}

    def test_resolve_without_slug(self, client):
        response = client.get("/resolve/")
        assert response.status_code == 404
        assert response.json() == {"message": "use with a slug"}


class TestRedirectEndpoint:
    """Tests for GET /resolve/{slug}/redirect endpoint."""

    def test_redirect_live(self, client, test_db):
        slug = shorten(client, "https://example.com/landing")["slug"]

        response = client.get(f"/resolve/{slug}/redirect", follow_redirects=False)
        assert response.status_code == 307
        assert response.headers["location"] == "https://example.com/landing"
        assert test_db.count() == 1

    def test_redirect_expired(self, client, clock, test_db):
        slug = shorten(client, duration=1000)["slug"]
        clock.advance(1000)

        response = client.get(f"/resolve/{slug}/redirect", follow_redirects=False)
        assert response.status_code == 404
        assert response.json() == {"message": "link expired"}
        assert test_db.count() == 0

        response = client.get(f"/resolve/{slug}/redirect", follow_redirects=False)
        assert response.status_code == 404
        assert response.json() == {"message": "link not found"}

    def test_redirect_unknown(self, client):
        response = client.get("/resolve/nothere/redirect", follow_redirects=False)
        assert response.status_code == 404
        assert response.json() == {"message": "link not found"}


class TestEdgeRouter:
    """Tests for short link visits through the edge router."""

    def test_redirect(self, client):
        slug = shorten(client, "https://example.com/landing?ref=short")["slug"]

        response = client.get(f"/{slug}", follow_redirects=False)
        assert response.status_code == 307
        assert response.headers["location"] == "https://example.com/landing?ref=short"

    def test_head_redirects(self, client):
        slug = shorten(client)["slug"]
        response = client.head(f"/{slug}", follow_redirects=False)
        assert response.status_code == 307

    def test_final_path_segment_is_the_slug(self, client):
        slug = shorten(client)["slug"]
        response = client.get(f"/go/to/{slug}", follow_redirects=False)
        assert response.status_code == 307
        assert response.headers["location"] == "https://example.com"

    def test_unknown_slug_falls_through(self, client):
        response = client.get("/doesnotexist", follow_redirects=False)
        # Normal routing answers, not the resolution service
        assert response.status_code == 404
        assert response.json() == {"detail": "Not Found"}

    def test_expired_slug_falls_through(self, client, clock, test_db):
        slug = shorten(client, duration=1000)["slug"]
        clock.advance(5000)

        response = client.get(f"/{slug}", follow_redirects=False)
        assert response.status_code == 404
        assert response.json() == {"detail": "Not Found"}
        assert test_db.count() == 0

    def test_post_is_not_intercepted(self, client):
        slug = shorten(client)["slug"]
        response = client.post(f"/{slug}", follow_redirects=False)
        assert response.status_code != 307

    def test_resolve_namespace_is_bypassed(self, test_db, settings, clock):
        test_db.insert(
            ShortLink(slug="resolve", url="https://example.com", created_at=0, expires_at=10**13)
        )
        app = create_app(settings=settings, store=test_db, clock=clock)
        with TestClient(app) as client:
            response = client.get("/resolve", follow_redirects=False)
        assert response.headers.get("location") != "https://example.com"

    def test_service_paths_still_served(self, client, test_db):
        test_db.insert(
            ShortLink(slug="health", url="https://example.com", created_at=0, expires_at=10**13)
        )
        response = client.get("/health", follow_redirects=False)
        assert response.status_code == 200

    def test_configurable_redirect_status(self, test_db, clock):
        from shortlinks.core.config import Settings

        settings = Settings(_env_file=None, redirect_status_code=302)
        app = create_app(settings=settings, store=test_db, clock=clock)
        with TestClient(app) as client:
            slug = shorten(client)["slug"]
            response = client.get(f"/{slug}", follow_redirects=False)
        assert response.status_code == 302

    def test_store_failure_is_server_error(self, settings, clock):
        store = MagicMock(spec=LinkStore)
        store.lookup.side_effect = StoreFailure()
        app = create_app(settings=settings, store=store, clock=clock)
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/abc1234", follow_redirects=False)
        assert response.status_code == 500
        assert response.json() == {"message": "internal storage error"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
