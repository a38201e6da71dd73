"""Tests for the HTTP API."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from server.main import create_app


@pytest.fixture
def client(content_root: Path) -> TestClient:
    return TestClient(create_app(content_root))


class TestSectionsEndpoints:
    """Tests for section listing endpoints."""

    def test_list_sections(self, client: TestClient) -> None:
        """The tree lists sections with published items only."""
        response = client.get("/api/sections")

        assert response.status_code == 200
        sections = response.json()["sections"]
        assert [section["slug"] for section in sections] == ["intro", "web-development"]
        web = sections[1]
        assert [item["slug"] for item in web["items"]] == ["frontend"]
        assert web["subsections"][0]["path"] == "web-development/backend"

    def test_get_nested_section(self, client: TestClient) -> None:
        response = client.get("/api/sections/web-development/backend")

        assert response.status_code == 200
        assert response.json()["items"][0]["href"] == "/docs/web-development/backend/databases"

    def test_unknown_section_is_404(self, client: TestClient) -> None:
        response = client.get("/api/sections/missing")

        assert response.status_code == 404


class TestDocumentEndpoint:
    """Tests for the document endpoint."""

    def test_get_document(self, client: TestClient) -> None:
        """Documents come back with render tree, TOC and navigation."""
        response = client.get("/api/docs/web-development/frontend")

        assert response.status_code == 200
        body = response.json()
        assert body["front_matter"]["title"] == "Frontend"
        assert body["compiled"]["toc"][0]["anchor"] == "components"
        assert body["compiled"]["error"] is None
        assert body["previous"]["document"] == "advanced"
        assert body["next"]["section"] == "web-development/backend"
        assert body["breadcrumbs"][-1]["title"] == "Frontend"

    def test_nested_document(self, client: TestClient) -> None:
        response = client.get("/api/docs/web-development/backend/databases")

        assert response.status_code == 200
        assert response.json()["section"] == "web-development/backend"

    def test_missing_document_is_404(self, client: TestClient) -> None:
        response = client.get("/api/docs/missing/x")

        assert response.status_code == 404
        assert "not found" in response.json()["detail"]

    def test_compile_error_returns_panel(self, content_root: Path, write_doc) -> None:
        """A broken body is served as an error panel, not a 500."""
        write_doc("01-intro/broken.md", "Intro\n\n</Tabs>\n", title="Broken")
        client = TestClient(create_app(content_root))

        response = client.get("/api/docs/intro/broken")

        assert response.status_code == 200
        error = response.json()["compiled"]["error"]
        assert error["message"] == "Unexpected </Tabs>, expected no closing tag"
        assert error["line"] == 3


class TestSearchAndRoutes:
    """Tests for search, routes and rebuild endpoints."""

    def test_search(self, client: TestClient) -> None:
        response = client.get("/api/search", params={"q": "power user"})

        assert response.status_code == 200
        results = response.json()["results"]
        assert [result["slug"] for result in results] == ["advanced"]
        assert results[0]["section"] == "intro"

    def test_empty_search(self, client: TestClient) -> None:
        response = client.get("/api/search")

        assert response.json()["results"] == []

    def test_routes(self, client: TestClient) -> None:
        response = client.get("/api/routes")

        routes = response.json()["routes"]
        assert {"section": "intro", "document": "overview", "title": "Intro"} in routes
        assert len(routes) == 4

    def test_rebuild_picks_up_changes(self, client: TestClient, content_root: Path, write_doc) -> None:
        """Changes on disk are served after POST /api/rebuild."""
        client.get("/api/routes")
        write_doc("01-intro/extra.md", title="Extra")
        (content_root / "01-intro" / "bad.md").write_text("---\n: [\n---\n", encoding="utf-8")

        assert client.get("/api/docs/intro/extra").status_code == 404

        response = client.post("/api/rebuild")

        assert response.status_code == 200
        body = response.json()
        assert body["sections"] == 2
        assert body["documents"] == 6
        assert [d["kind"] for d in body["diagnostics"]] == ["invalid_document"]
        assert client.get("/api/docs/intro/extra").status_code == 200

    def test_health(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "ok"}
