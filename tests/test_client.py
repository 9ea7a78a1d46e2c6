"""Tests for the content and search HTTP clients."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
import requests

from hub_pages.client import (
    ContentRepositoryClient,
    ContentRepositoryError,
    SearchIndexClient,
    SearchIndexError,
)


def _response(status: int, payload: object = None, text: str | None = None):
    body = text if text is not None else json.dumps(payload)

    def decode() -> object:
        return json.loads(body)

    return SimpleNamespace(status_code=status, text=body, json=decode)


@pytest.fixture
def session(mocker):
    return mocker.create_autospec(requests.Session, instance=True)


def test_fetch_builds_url_and_parses_document(session) -> None:
    session.get.return_value = _response(
        200, {"title": "Benefits", "base_path": "/browse/benefits"}
    )
    client = ContentRepositoryClient(
        api_base="https://content.example/api/content/", session=session
    )

    document = client.fetch("/browse/benefits/")

    assert document is not None
    assert document.title == "Benefits"
    url = session.get.call_args.args[0]
    assert url == "https://content.example/api/content/browse/benefits", (
        f"unexpected content URL {url!r}"
    )


def test_fetch_api_path_resolves_against_site_root(session) -> None:
    session.get.return_value = _response(200, {"title": "Report"})
    client = ContentRepositoryClient(site_root="https://site.example", session=session)
    client.fetch_api_path("/api/content/report")
    assert session.get.call_args.args[0] == "https://site.example/api/content/report"


@pytest.mark.parametrize("status", [404, 410])
def test_missing_documents_return_none(session, status: int) -> None:
    session.get.return_value = _response(status, {"error": "missing"})
    assert ContentRepositoryClient(session=session).fetch("gone") is None


def test_server_errors_raise(session) -> None:
    session.get.return_value = _response(503, text="unavailable")
    with pytest.raises(ContentRepositoryError, match="status 503"):
        ContentRepositoryClient(session=session).fetch("page")


def test_invalid_json_raises(session) -> None:
    session.get.return_value = _response(200, text="<html>")
    with pytest.raises(ContentRepositoryError, match="not valid JSON"):
        ContentRepositoryClient(session=session).fetch("page")


def test_transport_errors_are_wrapped(session) -> None:
    session.get.side_effect = requests.ConnectionError("boom")
    with pytest.raises(ContentRepositoryError, match="Failed to reach"):
        ContentRepositoryClient(session=session).fetch("page")


def test_search_sends_params_and_defaults_results(session) -> None:
    session.get.return_value = _response(200, {"total": 0})
    client = SearchIndexClient(search_url="https://search.example/api", session=session)

    response = client.search({"count": 3, "fields": ("title", "link")})

    assert response["results"] == []
    kwargs = session.get.call_args.kwargs
    assert kwargs["params"] == {"count": 3, "fields": ["title", "link"]}


def test_search_errors_raise(session) -> None:
    session.get.return_value = _response(500, text="oops")
    with pytest.raises(SearchIndexError):
        SearchIndexClient(session=session).search({"count": 1})
