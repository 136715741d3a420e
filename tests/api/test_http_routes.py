# Tests for the HTTP surface: health, file listing, static downloads and error bodies

import json
from dataclasses import replace
from datetime import datetime
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from filehost.main import create_app


@pytest.fixture
def client(context):
    """Create a test client for an app serving the release tree."""
    return TestClient(create_app(context), raise_server_exceptions=False)


class TestHealthEndpoint:
    def test_health_is_healthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["uptime"] >= 0
        assert data["pythonVersion"]
        datetime.fromisoformat(data["timestamp"])

    def test_health_body_round_trips_through_json(self, client):
        response = client.get("/health")

        data = json.loads(response.text)
        assert json.loads(json.dumps(data)) == data
        assert set(data) == {"status", "uptime", "timestamp", "pythonVersion"}


class TestFilesEndpoint:
    def test_lists_scanned_files(self, client, context):
        response = client.get("/api/files")

        assert response.status_code == 200
        data = response.json()
        assert data["files"] == ["/1.1.0/App-1.1.0.msi", "/1.2.0/linux/app_1.2.0_amd64.deb"]
        assert data["port"] == context.settings.port
        assert data["hasTunnel"] is False
        assert data["publicUrl"] is None

    def test_reports_published_tunnel(self, client, context):
        context.tunnel_url = "https://abc123.ngrok.app"

        data = client.get("/api/files").json()

        assert data["hasTunnel"] is True
        assert data["publicUrl"] == "https://abc123.ngrok.app"

    def test_rescans_on_every_request(self, client, context, write_file):
        assert "/2.0.0/New.pkg" not in client.get("/api/files").json()["files"]

        write_file(context.settings.content_root / "2.0.0" / "New.pkg")

        assert "/2.0.0/New.pkg" in client.get("/api/files").json()["files"]


class TestStaticDownloads:
    def test_installer_is_sent_as_attachment(self, client):
        response = client.get("/1.1.0/App-1.1.0.msi")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/octet-stream"
        assert response.headers["content-disposition"] == 'attachment; filename="App-1.1.0.msi"'
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["cache-control"] == "public, max-age=3600"
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.content.startswith(b"MZ")

    def test_non_binary_file_keeps_its_type_but_gets_cache_headers(self, client):
        response = client.get("/1.1.0/App-1.1.0.zip.sig")

        assert response.status_code == 200
        assert "content-disposition" not in response.headers
        assert response.headers["cache-control"] == "public, max-age=3600"
        assert response.headers["access-control-allow-origin"] == "*"

    def test_binary_extension_match_ignores_case(self, client, context, write_file):
        write_file(context.settings.content_root / "1.3.0" / "SETUP.EXE")

        response = client.get("/1.3.0/SETUP.EXE")

        assert response.headers["content-type"] == "application/octet-stream"
        assert 'filename="SETUP.EXE"' in response.headers["content-disposition"]

    def test_non_latin1_installer_name_is_served(self, client, context, write_file):
        write_file(context.settings.content_root / "2.0.0" / "应用-2.0.0.msi", b"MZ\x00")

        assert "/2.0.0/应用-2.0.0.msi" in client.get("/api/files").json()["files"]
        response = client.get("/2.0.0/应用-2.0.0.msi")

        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            "attachment; filename*=utf-8''%E5%BA%94%E7%94%A8-2.0.0.msi"
        )
        assert response.content == b"MZ\x00"

    @pytest.mark.parametrize("path", ["/.env", "/.git/objects/pack.zip"])
    def test_dotfiles_are_never_served(self, client, path):
        response = client.get(path)

        assert response.status_code == 404
        assert response.json()["error"] == "File not found"


class TestPages:
    def test_index_page(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "Downloads" in response.text

    def test_stylesheet(self, client):
        response = client.get("/style.css")

        assert response.status_code == 200
        assert "text/css" in response.headers["content-type"]

    def test_missing_index_falls_back_to_not_found(self, client, public_dir):
        (public_dir / "index.html").unlink()

        response = client.get("/")

        assert response.status_code == 404
        assert response.json()["path"] == "/"


class TestErrorResponses:
    def test_unknown_path_returns_structured_404(self, client):
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "File not found"
        assert data["path"] == "/does-not-exist"
        assert data["availableEndpoints"] == [
            "/1.1.0/App-1.1.0.msi",
            "/1.2.0/linux/app_1.2.0_amd64.deb",
            "/health",
        ]

    def test_404_keeps_query_string(self, client):
        response = client.get("/missing?v=2")

        assert response.json()["path"] == "/missing?v=2"

    def test_404_with_empty_tree_gives_hint(self, context, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()
        context.settings = replace(context.settings, content_root=empty)
        client = TestClient(create_app(context), raise_server_exceptions=False)

        data = client.get("/nothing-here").json()

        assert data["availableEndpoints"][0] == "/health"
        assert "1.1.0/" in data["availableEndpoints"][1]

    def test_handler_error_becomes_500_with_message(self, client):
        with patch("filehost.state.scan", side_effect=RuntimeError("disk on fire")):
            response = client.get("/api/files")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "message": "disk on fire"}

    def test_method_not_allowed_is_json(self, client):
        response = client.post("/health")

        assert response.status_code == 405
        assert response.json()["path"] == "/health"
