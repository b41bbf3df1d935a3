"""
film_client.py
==============
Lightweight wrapper around the FilmList REST API.

Usage
-----
::

    from film_client import FilmsClient

    client = FilmsClient("http://localhost:8001")
    film = client.create_film({"title": "The Matrix", "year": 1999, ...})
    client.get_film(film["id"])
    # {"id": "...", "title": "The Matrix", "rating": 0.0, "actors": [], ...}

Absence is not an error: ``get_film``/``update_film`` return ``None`` and
``delete_film`` returns ``False`` when the server answers 404.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 10  # seconds


class FilmsConnectionError(Exception):
    """Raised when the server cannot be reached."""


class FilmsAPIError(Exception):
    """Raised when the server returns an unexpected error status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class FilmsClient:
    """Minimal FilmList API client."""

    def __init__(self, base_url: str, timeout: int = _DEFAULT_TIMEOUT) -> None:
        """
        Args:
            base_url: Server root, e.g. ``http://localhost:8001``.
            timeout:  HTTP request timeout in seconds.
        """
        if not base_url:
            raise ValueError("base_url must not be empty")
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------

    def list_films(self, limit: Optional[int] = None,
                   offset: Optional[int] = None) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {}
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset
        return self._request("GET", "/films", params=params).json()

    def get_film(self, film_id: str) -> Optional[Dict[str, Any]]:
        resp = self._request("GET", f"/films/{film_id}", allow_404=True)
        return None if resp.status_code == 404 else resp.json()

    def create_film(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Create a film from ``title, year, country, director, duration, ageRating``."""
        return self._request("POST", "/films", json=fields).json()

    def update_film(self, film_id: str,
                    fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Replace every mutable field of *film_id*.

        *fields* must hold the full record (``rating`` and ``actors``
        included); merge partial edits with the current film first.
        """
        resp = self._request("PUT", f"/films/{film_id}", json=fields, allow_404=True)
        return None if resp.status_code == 404 else resp.json()

    def delete_film(self, film_id: str) -> bool:
        resp = self._request("DELETE", f"/films/{film_id}", allow_404=True)
        return resp.status_code != 404

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, allow_404: bool = False,
                 **kwargs) -> requests.Response:
        """Send a request and raise for any error other than an allowed 404."""
        url = self._base_url + path
        try:
            resp = requests.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as exc:
            raise FilmsConnectionError(f"Could not reach {url}: {exc}") from exc

        logger.debug("%s %s -> %s", method, path, resp.status_code)
        if allow_404 and resp.status_code == 404:
            return resp
        if resp.status_code >= 400:
            raise FilmsAPIError(resp.status_code, self._error_message(resp))
        return resp

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            return resp.text
        if isinstance(body, dict) and "message" in body:
            return str(body["message"])
        return resp.text
