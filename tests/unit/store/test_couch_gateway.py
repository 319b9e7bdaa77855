"""Unit tests for the HTTP document store gateway."""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any

import pytest
import requests

from core.config import SweepConfig
from core.errors import SweepStoreError
from store.couch_gateway import CouchGateway


class _FakeResponse:
    def __init__(self, status_code: int, payload: Any) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = str(payload)

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class _FakeSession:
    def __init__(self, response: _FakeResponse | Exception) -> None:
        self.auth: Any = None
        self.requests: list[dict[str, Any]] = []
        self._response = response

    def request(self, method: str, url: str, params: Any = None, json: Any = None) -> Any:
        self.requests.append({"method": method, "url": url, "params": params, "json": json})
        if isinstance(self._response, Exception):
            raise self._response
        return self._response


def _gateway(session: _FakeSession, **overrides: Any) -> CouchGateway:
    config = replace(
        SweepConfig.from_env(),
        couch_url="http://couch:5984",
        database="medic",
        couch_user=None,
        couch_password=None,
    )
    return CouchGateway(replace(config, **overrides), session=session)


def test_query_encodes_keys_as_json() -> None:
    """View keys should be JSON-encoded query parameters."""
    session = _FakeSession(_FakeResponse(200, {"rows": []}))

    _gateway(session).query(
        "medic/data_records_by_district",
        startkey=["b1"],
        endkey=["b1\ufff0"],
        include_docs=True,
        limit=10,
    )
    request = session.requests[0]

    assert request["url"] == "http://couch:5984/medic/_design/medic/_view/data_records_by_district"
    assert request["params"] == {
        "include_docs": "true",
        "startkey": json.dumps(["b1"]),
        "endkey": json.dumps(["b1\ufff0"]),
        "limit": "10",
    }


def test_query_rejects_malformed_view_name() -> None:
    """View names must name both design document and view."""
    session = _FakeSession(_FakeResponse(200, {"rows": []}))

    with pytest.raises(SweepStoreError):
        _gateway(session).query("contacts_by_place", key=["p"])

    assert session.requests == []


def test_bulk_write_posts_docs_and_parses_results() -> None:
    """Bulk writes should post all docs and map per-document outcomes."""
    session = _FakeSession(
        _FakeResponse(
            201,
            [
                {"ok": True, "id": "a", "rev": "2-x"},
                {"id": "b", "error": "conflict", "reason": "Document update conflict."},
            ],
        )
    )

    results = _gateway(session).bulk_write([{"_id": "a"}, {"_id": "b"}])

    assert session.requests[0]["json"] == {"docs": [{"_id": "a"}, {"_id": "b"}]}
    assert [(result.doc_id, result.ok, result.error) for result in results] == [
        ("a", True, None),
        ("b", False, "conflict"),
    ]


def test_http_error_raises_store_error() -> None:
    """Status codes of 400 and above should raise with the store reason."""
    session = _FakeSession(_FakeResponse(404, {"error": "not_found", "reason": "missing"}))

    with pytest.raises(SweepStoreError, match="not_found"):
        _gateway(session).get("branch-1")


def test_transport_error_raises_store_error() -> None:
    """Connection failures should surface as store errors."""
    session = _FakeSession(requests.ConnectionError("refused"))

    with pytest.raises(SweepStoreError, match="refused"):
        _gateway(session).info()


def test_non_json_body_raises_store_error() -> None:
    """Undecodable bodies should surface as store errors."""
    session = _FakeSession(_FakeResponse(200, ValueError("no json")))

    with pytest.raises(SweepStoreError):
        _gateway(session).info()


def test_credentials_configure_basic_auth() -> None:
    """Configured credentials should be attached to the session."""
    session = _FakeSession(_FakeResponse(200, {}))

    _gateway(session, couch_user="admin", couch_password="secret")

    assert session.auth == ("admin", "secret")


def test_document_ids_are_url_quoted() -> None:
    """Ids with reserved characters should be escaped in the path."""
    session = _FakeSession(_FakeResponse(200, {"_id": "org.couchdb.user:ana"}))

    _gateway(session).get("org.couchdb.user:ana")

    assert session.requests[0]["url"].endswith("/medic/org.couchdb.user%3Aana")
