"""HTTP gateway to a CouchDB-compatible document store.

This module implements the DocumentStore contract with requests.
Transport and HTTP failures surface as SweepStoreError; per-document
bulk write rejections are returned to the caller as WriteResult values.
"""

from __future__ import annotations

import json
from typing import Any, Sequence
from urllib.parse import quote

import requests

from core.config import SweepConfig
from core.errors import SweepStoreError
from core.types import Document, WriteResult


class CouchGateway:
    """Document store gateway backed by the CouchDB HTTP API."""

    def __init__(self, config: SweepConfig, session: Any | None = None) -> None:
        """Create a gateway for the configured database.

        Args:
            config: Runtime configuration with server URL and credentials.
            session: Optional preconfigured requests session.
        """
        self._db_url = f"{config.couch_url}/{quote(config.database, safe='')}"
        self._session = session or requests.Session()
        if config.couch_user:
            self._session.auth = (config.couch_user, config.couch_password or "")

    def get(self, doc_id: str) -> Document:
        """Fetch one document by id."""
        return self._request("GET", f"/{quote(doc_id, safe='')}")

    def query(
        self,
        view_name: str,
        *,
        key: Any = None,
        startkey: Any = None,
        endkey: Any = None,
        include_docs: bool = False,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Query a secondary-index view.

        Args:
            view_name: View in ``design/view`` form.
            key: Exact key to match.
            startkey: Inclusive lower key bound.
            endkey: Upper key bound.
            include_docs: Embed full documents in rows.
            limit: Maximum number of rows.

        Returns:
            View response with a ``rows`` list.

        Raises:
            SweepStoreError: If the view name is malformed or the query fails.
        """
        design, separator, view = view_name.partition("/")
        if not separator or not design or not view:
            raise SweepStoreError(
                f"Invalid view name '{view_name}'. Use the 'design/view' form."
            )
        params: dict[str, str] = {"include_docs": "true" if include_docs else "false"}
        for param_name, value in (("key", key), ("startkey", startkey), ("endkey", endkey)):
            if value is not None:
                params[param_name] = json.dumps(value)
        if limit is not None:
            params["limit"] = str(limit)
        return self._request("GET", f"/_design/{design}/_view/{view}", params=params)

    def bulk_write(self, docs: Sequence[Document]) -> tuple[WriteResult, ...]:
        """Write documents in one bulk request.

        Args:
            docs: Documents to create, update, or tombstone.

        Returns:
            One result per document in request order.
        """
        payload = self._request("POST", "/_bulk_docs", json_body={"docs": list(docs)})
        if not isinstance(payload, list):
            raise SweepStoreError(
                f"Unexpected bulk write response from {self._db_url}: expected a list."
            )
        return tuple(_write_result_from_payload(item) for item in payload)

    def info(self) -> dict[str, Any]:
        """Return database statistics."""
        return self._request("GET", "")

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json_body: Any = None,
    ) -> Any:
        url = f"{self._db_url}{path}"
        try:
            response = self._session.request(method, url, params=params, json=json_body)
        except requests.RequestException as error:
            raise SweepStoreError(f"Store request {method} {url} failed: {error}") from error
        if response.status_code >= 400:
            raise SweepStoreError(
                f"Store request {method} {url} returned HTTP {response.status_code}: "
                f"{_error_detail(response)}"
            )
        try:
            return response.json()
        except ValueError as error:
            raise SweepStoreError(
                f"Store request {method} {url} returned a non-JSON body."
            ) from error


def _write_result_from_payload(item: dict[str, Any]) -> WriteResult:
    error = item.get("error")
    return WriteResult(
        doc_id=str(item.get("id", "")),
        ok=error is None and item.get("ok", True) is not False,
        rev=item.get("rev"),
        error=str(error) if error is not None else None,
        reason=item.get("reason"),
    )


def _error_detail(response: Any) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text
    if isinstance(payload, dict):
        return f"{payload.get('error', 'unknown')} ({payload.get('reason', 'no reason')})"
    return str(payload)
