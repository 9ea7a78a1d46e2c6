r"""HTTP collaborators for the content repository and the search index.

Both clients share one transport recipe: a ``requests.Session`` mounted with
an ``HTTPAdapter`` whose urllib3 ``Retry`` policy absorbs transient gateway
errors. Callers receive parsed structures or ``None`` for missing documents;
every other failure surfaces as a module-specific error.

Example
-------
>>> from hub_pages.client import ContentRepositoryClient
>>> client = ContentRepositoryClient(timeout=5)  # doctest: +SKIP
>>> document = client.fetch("browse/benefits")  # doctest: +SKIP
>>> document.title  # doctest: +SKIP
'Benefits'
"""

from __future__ import annotations

import collections.abc as cabc
import json
import logging
import typing as typ
from http import HTTPStatus

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .models import ContentDocument

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_API_BASE = "https://www.gov.uk/api/content"
DEFAULT_SITE_ROOT = "https://www.gov.uk"
DEFAULT_SEARCH_API_URL = "https://www.gov.uk/api/search.json"
_USER_AGENT = "hub-pages/0.1"


class ContentRepositoryError(RuntimeError):
    """Raised when the content API returns an unexpected error response."""


class SearchIndexError(RuntimeError):
    """Raised when the search API returns an unexpected error response."""


def build_session() -> requests.Session:
    """Return a session that retries idempotent requests on gateway errors."""
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class ContentRepositoryClient:
    """Fetch published documents by public path or by content API path.

    The client follows redirects, decodes JSON payloads into
    :class:`~hub_pages.models.ContentDocument` instances, and reports missing
    documents as ``None`` so builders can degrade to empty results.
    """

    def __init__(
        self,
        *,
        api_base: str = DEFAULT_CONTENT_API_BASE,
        site_root: str = DEFAULT_SITE_ROOT,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialise the client with endpoints and an optional transport.

        Parameters
        ----------
        api_base : str, optional
            Base URL of the content API; paths are appended after a slash.
        site_root : str, optional
            Site origin used to resolve ``api_path`` values embedded in links.
        session : requests.Session, optional
            Preconfigured session to reuse connections. Defaults to
            :func:`build_session`.
        timeout : float, optional
            Per-request timeout in seconds. Defaults to ``10.0``.
        """
        self._api_base = api_base.rstrip("/") or DEFAULT_CONTENT_API_BASE
        self._site_root = site_root.rstrip("/") or DEFAULT_SITE_ROOT
        self._session = session or build_session()
        self.timeout = timeout
        self._headers = {"Accept": "application/json", "User-Agent": _USER_AGENT}

    def fetch(self, path: str) -> ContentDocument | None:
        """Return the document published at ``path`` or None when missing."""
        normalized = path.strip().strip("/")
        return self._fetch_document(f"{self._api_base}/{normalized}")

    def fetch_api_path(self, api_path: str) -> ContentDocument | None:
        """Return the document at a content API path such as ``/api/content/x``."""
        normalized = "/" + api_path.strip().lstrip("/")
        return self._fetch_document(f"{self._site_root}{normalized}")

    def _fetch_document(self, url: str) -> ContentDocument | None:
        payload = self._get_json(url)
        if payload is None:
            return None
        return ContentDocument.from_payload(payload)

    def _get_json(self, url: str) -> cabc.Mapping[str, typ.Any] | None:
        logger.debug("fetching %s", url)
        try:
            response = self._session.get(
                url, headers=self._headers, timeout=self.timeout, allow_redirects=True
            )
        except requests.RequestException as exc:
            msg = f"Failed to reach content API at '{url}': {exc}"
            raise ContentRepositoryError(msg) from exc

        if response.status_code in (HTTPStatus.NOT_FOUND, HTTPStatus.GONE):
            return None
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            snippet = response.text[:200]
            msg = (
                f"Content lookup for '{url}' failed with "
                f"status {response.status_code}: {snippet}"
            )
            raise ContentRepositoryError(msg)

        try:
            payload = response.json()
        except json.JSONDecodeError as exc:
            msg = f"Content API response for '{url}' was not valid JSON"
            raise ContentRepositoryError(msg) from exc
        if not isinstance(payload, cabc.Mapping):
            msg = f"Content API response for '{url}' was not a JSON object"
            raise ContentRepositoryError(msg)
        return payload


class SearchIndexClient:
    """Query the site search index with raw option mappings."""

    def __init__(
        self,
        *,
        search_url: str = DEFAULT_SEARCH_API_URL,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._search_url = search_url
        self._session = session or build_session()
        self.timeout = timeout
        self._headers = {"Accept": "application/json", "User-Agent": _USER_AGENT}

    def search(self, params: cabc.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
        """Run a search query and return the decoded response.

        Parameters
        ----------
        params : Mapping[str, Any]
            Query options such as ``count``, ``fields``, ``order``, filters,
            and ``facet_organisations``. Sequence values are sent as repeated
            parameters.

        Returns
        -------
        dict[str, Any]
            Decoded response; ``results`` always holds a list.

        Raises
        ------
        SearchIndexError
            Raised on transport failures, error statuses, or invalid JSON.
        """
        query = {
            key: list(value) if isinstance(value, tuple) else value
            for key, value in params.items()
        }
        logger.debug("searching %s with %s", self._search_url, query)
        try:
            response = self._session.get(
                self._search_url,
                params=query,
                headers=self._headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            msg = f"Failed to reach search API: {exc}"
            raise SearchIndexError(msg) from exc

        if response.status_code >= HTTPStatus.BAD_REQUEST:
            snippet = response.text[:200]
            msg = f"Search failed with status {response.status_code}: {snippet}"
            raise SearchIndexError(msg)
        try:
            payload = response.json()
        except json.JSONDecodeError as exc:
            msg = "Search API response was not valid JSON"
            raise SearchIndexError(msg) from exc
        if not isinstance(payload, dict):
            msg = "Search API response was not a JSON object"
            raise SearchIndexError(msg)
        if not isinstance(payload.get("results"), list):
            payload["results"] = []
        return payload


__all__ = [
    "ContentRepositoryClient",
    "ContentRepositoryError",
    "SearchIndexClient",
    "SearchIndexError",
    "build_session",
]
