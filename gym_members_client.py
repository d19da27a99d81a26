"""Gym Management API client.

A thin wrapper around the member REST API built on ``requests``.  The
client unwraps the API's response envelope so callers receive the
member records directly:

* :meth:`list_members` – every member.
* :meth:`get_member` – one member by id.
* :meth:`create_member` – add a member.
* :meth:`update_member` – change some fields of a member.
* :meth:`delete_member` – remove a member; returns the removed record.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``.  On failure ``data`` is ``None`` (or an empty list for
:meth:`list_members`) and ``error`` is a dictionary with the keys
``status_code`` (``None`` when the server could not be reached),
``message`` and ``error`` taken from the envelope.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

MEMBERS_PATH = "/api/members"

ApiError = Dict[str, Any]


class GymMembersAPI:
    """Client for the ``/api/members`` endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API, e.g. ``http://localhost:5000``.
            session: Optional requests session.  If not supplied a
                session is created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Perform an HTTP request and return ``(envelope, error)``.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url`.
            json_body: JSON body for ``POST`` and ``PUT`` requests.
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
            return response.json(), None
        except requests.HTTPError as exc:
            response = exc.response
            status = response.status_code if response is not None else None
            message = ""
            detail = None
            if response is not None:
                try:
                    body = response.json()
                    message = body.get("message") or ""
                    detail = body.get("error")
                except ValueError:
                    message = response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message, "error": detail}
        except requests.JSONDecodeError as exc:
            # 2xx response without a JSON body
            logger.error("API returned an unreadable response: %s", exc)
            return None, {"status_code": None, "message": "Unexpected response from the API", "error": str(exc)}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {
                "status_code": None,
                "message": "Could not reach the Gym Management API",
                "error": str(exc),
            }

    # ------------------------------------------------------------------
    # Member operations
    # ------------------------------------------------------------------
    def list_members(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve all members."""
        envelope, error = self._request("GET", MEMBERS_PATH)
        if error:
            return [], error
        return envelope.get("data") or [], None

    def get_member(self, member_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve a single member by id."""
        envelope, error = self._request("GET", f"{MEMBERS_PATH}/{member_id}")
        if error:
            return None, error
        return envelope.get("data"), None

    def create_member(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Create a member.

        Args:
            payload: ``name``, ``email``, ``phone`` and optionally
                ``membershipType`` and ``active``.
        """
        envelope, error = self._request("POST", MEMBERS_PATH, json_body=payload)
        if error:
            return None, error
        return envelope.get("data"), None

    def update_member(
        self, member_id: Any, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Update the given fields of a member."""
        envelope, error = self._request("PUT", f"{MEMBERS_PATH}/{member_id}", json_body=payload)
        if error:
            return None, error
        return envelope.get("data"), None

    def delete_member(self, member_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Delete a member and return the removed record."""
        envelope, error = self._request("DELETE", f"{MEMBERS_PATH}/{member_id}")
        if error:
            return None, error
        return envelope.get("data"), None


def describe_error(error: ApiError) -> str:
    """Render an error dictionary as a single line for display."""
    message = error.get("message") or "Request failed"
    detail = error.get("error")
    if detail and detail not in message:
        return f"{message}: {detail}"
    return message
