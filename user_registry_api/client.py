"""User Registry API client.

A thin wrapper around the HTTP API using the ``requests`` library.  It
exposes one method per endpoint:

* :meth:`list_users` - return every user.
* :meth:`get_user` - fetch a single user by its identifier.
* :meth:`create_user` - create a user and return it as stored.
* :meth:`upsert_user` - create or replace the user under a given id.
* :meth:`delete_user` - remove a user.
* :meth:`health` - query the health endpoint.

The client never raises on HTTP or connection failures.  Every method
returns a tuple ``(result, error)`` where ``error`` is ``None`` on
success and otherwise a dictionary with the keys ``status_code`` and
``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class UserRegistryClient:
    """Client for the user registry HTTP API."""

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Base URL of the API, e.g. ``http://localhost:8080``.
            session: Optional requests session.  If not supplied a
                session is created automatically.
            timeout: Timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``.  ``data`` holds the decoded JSON
            body on success (``None`` for empty bodies).  On failure
            ``data`` is ``None`` and ``error`` describes the problem.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = self._error_message(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _error_message(exc: requests.HTTPError) -> str:
        response = exc.response
        message = ""
        if response is not None:
            try:
                body = response.json()
            except ValueError:
                message = response.text
            else:
                if isinstance(body, dict):
                    message = body.get("error") or body.get("message") or body.get("detail") or ""
                if not message:
                    message = str(body)
        return message or str(exc)

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all users.  On failure the list is empty."""
        data, error = self._request("GET", "/users")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def get_user(self, user_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single user.

        An unknown id is not treated as an error: the result is
        ``(None, None)``.
        """
        data, error = self._request("GET", f"/users/{user_id}")
        if error:
            if error["status_code"] == 404:
                return None, None
            return None, error
        return data, None

    def create_user(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a user.

        Args:
            payload: User fields (``name``, ``age`` and optionally ``id``).
        Returns:
            A tuple ``(user, error)``.  ``user`` is the record as stored,
            including the id assigned by the server.
        """
        data, error = self._request("POST", "/user", json_body=payload)
        if error:
            return None, error
        if isinstance(data, dict):
            return data.get("data"), None
        return None, None

    def upsert_user(self, user_id: str, payload: Dict[str, Any]) -> Tuple[bool, Optional[Error]]:
        """Create or replace the user stored under ``user_id``."""
        _, error = self._request("PUT", f"/user/{user_id}", json_body=payload)
        return error is None, error

    def delete_user(self, user_id: str) -> Tuple[bool, Optional[Error]]:
        """Delete a user.  Returns ``(True, None)`` when it was removed."""
        _, error = self._request("DELETE", f"/user/{user_id}")
        return error is None, error

    def health(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Query the health endpoint."""
        return self._request("GET", "/health")
