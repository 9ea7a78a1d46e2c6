"""Shared fixtures for hub page tests.

Upstream collaborators are replaced with in-memory fakes keyed by path so
tests describe documents as plain payload mappings.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

import pytest

from hub_pages.models import ContentDocument


class FakeContentClient:
    """Serve content documents from a mapping of path to payload."""

    def __init__(self, documents: cabc.Mapping[str, dict[str, typ.Any]]) -> None:
        self.documents = {
            "/" + path.strip("/"): payload for path, payload in documents.items()
        }
        self.calls: list[str] = []

    def fetch(self, path: str) -> ContentDocument | None:
        key = "/" + path.strip().strip("/")
        self.calls.append(key)
        payload = self.documents.get(key)
        if payload is None:
            # Part paths resolve to their parent document, as upstream does.
            parents = [
                prefix
                for prefix in self.documents
                if prefix != "/" and key.startswith(prefix + "/")
            ]
            if parents:
                payload = self.documents[max(parents, key=len)]
        return None if payload is None else ContentDocument.from_payload(payload)

    def fetch_api_path(self, api_path: str) -> ContentDocument | None:
        return self.fetch(api_path.removeprefix("/api/content"))


class FakeSearchClient:
    """Answer searches through a callable and record every query."""

    def __init__(
        self, responder: typ.Callable[[dict[str, typ.Any]], dict[str, typ.Any]]
    ) -> None:
        self.responder = responder
        self.queries: list[dict[str, typ.Any]] = []

    def search(self, params: cabc.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
        query = dict(params)
        self.queries.append(query)
        response = self.responder(query)
        response.setdefault("results", [])
        return response


@pytest.fixture
def make_document() -> typ.Callable[..., ContentDocument]:
    """Return a factory building documents from keyword payload fields."""

    def factory(**payload: typ.Any) -> ContentDocument:
        payload.setdefault("title", "Untitled")
        payload.setdefault("base_path", "/untitled")
        return ContentDocument.from_payload(payload)

    return factory


@pytest.fixture
def content_client() -> typ.Callable[..., FakeContentClient]:
    """Return a factory for in-memory content clients."""
    return FakeContentClient


@pytest.fixture
def search_client() -> typ.Callable[..., FakeSearchClient]:
    """Return a factory for recording search clients."""
    return FakeSearchClient
