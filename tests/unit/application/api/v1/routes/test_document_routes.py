"""HTTP tests for the document routes against a real store in tmp_path."""

import json

import pytest
from fastapi.testclient import TestClient

from docreg import __version__
from docreg.application.api.rest.app import create_app
from docreg.config import Config, StorageConfig

NAME = "acme_report_2025-12-09.xml"
INTERNAL = "acme_report_2025-12-09.json"
XML = b"<root><customer>acme</customer><total>10</total></root>"


@pytest.fixture
def client(tmp_path):
    app = create_app(Config(storage=StorageConfig(path=tmp_path)))
    with TestClient(app) as client:
        yield client


def _upload(client, name=NAME, content=XML, method="POST"):
    files = {"file": (name, content, "application/xml")}
    return client.request(method, "/api/v1/documents", files=files)


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": __version__}


class TestUpload:
    def test_returns_converted_json_as_attachment(self, client, tmp_path):
        response = _upload(client)

        assert response.status_code == 201
        assert INTERNAL in response.headers["content-disposition"]
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {"root": {"customer": "acme", "total": "10"}}
        assert (tmp_path / INTERNAL).read_bytes() == response.content

    def test_duplicate_conflicts(self, client):
        assert _upload(client).status_code == 201

        response = _upload(client, content=b"<root><other/></root>")

        assert response.status_code == 409
        assert "already exist" in response.json()["message"]

    def test_invalid_name(self, client, tmp_path):
        response = _upload(client, name="acme-report.xml")

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "INVALID_NAME"
        assert body["field"] == "name"
        assert not (tmp_path / "acme-report.json").exists()

    def test_wrong_extension(self, client):
        assert _upload(client, name="acme_report_2025-12-09.txt").status_code == 400

    def test_invalid_xml_leaves_nothing_behind(self, client, tmp_path):
        response = _upload(client, content=b"<root>")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_CONTENT"
        assert not (tmp_path / INTERNAL).exists()
        assert client.get("/api/v1/documents/by-customer/acme").json() == {"files": []}


class TestReplace:
    def test_creates_when_missing(self, client):
        response = _upload(client, method="PUT")

        assert response.status_code == 202
        assert client.get(f"/api/v1/documents/{NAME}").status_code == 200

    def test_overwrites_existing(self, client):
        _upload(client)

        response = _upload(client, content=b"<root><total>20</total></root>", method="PUT")

        assert response.status_code == 202
        fetched = client.get(f"/api/v1/documents/{NAME}")
        assert fetched.json() == {"root": {"total": "20"}}
        assert client.get("/api/v1/documents/by-type/report").json() == {"files": [NAME]}


class TestFetch:
    def test_by_name(self, client):
        _upload(client)

        response = client.get(f"/api/v1/documents/{NAME}")

        assert response.status_code == 200
        assert INTERNAL in response.headers["content-disposition"]
        assert json.loads(response.content) == {"root": {"customer": "acme", "total": "10"}}

    def test_by_name_missing(self, client):
        response = client.get(f"/api/v1/documents/{NAME}")

        assert response.status_code == 404
        assert response.json()["message"] == f"File not found: {NAME}"

    def test_by_indexes(self, client):
        _upload(client)
        _upload(client, name="acme_invoice_2025-12-09.xml")
        _upload(client, name="globex_report_2025-01-31.xml")

        assert client.get("/api/v1/documents/by-customer/acme").json() == {
            "files": ["acme_invoice_2025-12-09.xml", "acme_report_2025-12-09.xml"]
        }
        assert client.get("/api/v1/documents/by-type/report").json() == {
            "files": ["acme_report_2025-12-09.xml", "globex_report_2025-01-31.xml"]
        }
        assert client.get("/api/v1/documents/by-date/2025-01-31").json() == {
            "files": ["globex_report_2025-01-31.xml"]
        }

    def test_unknown_index_key_is_empty(self, client):
        response = client.get("/api/v1/documents/by-customer/nobody")

        assert response.status_code == 200
        assert response.json() == {"files": []}

    def test_malformed_date_is_rejected(self, client):
        assert client.get("/api/v1/documents/by-date/yesterday").status_code == 422


class TestDelete:
    def test_removes_document_and_index_entries(self, client, tmp_path):
        _upload(client)

        response = client.delete(f"/api/v1/documents/{NAME}")

        assert response.status_code == 204
        assert not (tmp_path / INTERNAL).exists()
        assert client.get(f"/api/v1/documents/{NAME}").status_code == 404
        for path in ("by-customer/acme", "by-type/report", "by-date/2025-12-09"):
            assert client.get(f"/api/v1/documents/{path}").json() == {"files": []}

    def test_missing(self, client):
        response = client.delete(f"/api/v1/documents/{NAME}")

        assert response.status_code == 404

    def test_invalid_name(self, client):
        response = client.delete("/api/v1/documents/not-a-document.xml")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_NAME"
