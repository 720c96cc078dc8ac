"""
HTTP transport for bulk payloads.
"""

import asyncio
import threading
from typing import Dict, Optional, Protocol

import requests
from requests.structures import CaseInsensitiveDict

from .errors import TransportError

NDJSON_CONTENT_TYPE = "application/x-ndjson"


class Transport(Protocol):
    """Delivers one bulk payload to an address."""

    async def post_async(
        self,
        address: str,
        payload: bytes,
        encoding: str,
        is_compressed: bool = False,
    ) -> None:
        """
        Send ``payload`` to ``address``.

        Raises:
            TransportError: the payload was not accepted
        """
        ...


class HttpTransport:
    """
    Posts bulk payloads over HTTP with a requests session.

    The blocking request runs in a worker thread so callers can await it.
    Concurrent posts share one session; a failed post swaps in a fresh
    session for later sends and leaves the old one to requests in flight.
    """

    def __init__(
        self,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize HttpTransport.

        Args:
            headers: Additional headers to send with requests
            timeout: Request timeout in seconds
            session: Custom requests.Session to use (e.g., shared by application)
        """
        self.headers = CaseInsensitiveDict(headers or {})
        self.timeout = timeout
        self._lock = threading.Lock()
        self._owns_session = session is None
        self._session = (
            self._build_session()
            if session is None
            else self._prepare_session(session)
        )

    def _build_session(self) -> requests.Session:
        return self._prepare_session(requests.Session())

    def _prepare_session(self, session: requests.Session) -> requests.Session:
        session.headers.update(self.headers)
        return session

    def _request_headers(
        self, encoding: str, is_compressed: bool
    ) -> Dict[str, str]:
        headers = {}
        # Caller-provided Content-Type wins
        if "Content-Type" not in self.headers:
            headers["Content-Type"] = (
                f"{NDJSON_CONTENT_TYPE}; charset={encoding}"
            )
        if is_compressed:
            headers["Content-Encoding"] = "gzip"
        return headers

    def reset_session(
        self, new_session: Optional[requests.Session] = None
    ) -> None:
        """Replace the current HTTP session.

        Passing ``new_session`` allows callers to swap in their own session
        instance, otherwise a fresh internal session is created. Existing
        internally-owned sessions are closed before replacement.
        """
        with self._lock:
            if self._owns_session and self._session:
                self._session.close()

            if new_session is not None:
                self._session = self._prepare_session(new_session)
                self._owns_session = False
            else:
                self._session = self._build_session()
                self._owns_session = True

    def _replace_failed_session(self, failed: requests.Session) -> None:
        # Not closed: other threads may still be posting through it
        with self._lock:
            if self._owns_session and self._session is failed:
                self._session = self._build_session()

    def post(
        self,
        address: str,
        payload: bytes,
        encoding: str,
        is_compressed: bool = False,
    ) -> None:
        """
        Send a bulk payload, blocking until the response arrives.

        Args:
            address: Destination URL
            payload: Encoded (and possibly gzipped) bulk payload
            encoding: Text encoding of the payload
            is_compressed: Whether the payload is gzipped

        Raises:
            TransportError: on connection errors or a non-2xx response
        """
        with self._lock:
            session = self._session

        try:
            response = session.post(
                address,
                data=payload,
                headers=self._request_headers(encoding, is_compressed),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            # Refresh internal session so future sends can recover cleanly
            self._replace_failed_session(session)
            raise TransportError(
                f"POST to {address} failed: {exc}", address=address
            ) from exc

        if response.status_code >= 300:
            raise TransportError(
                f"POST to {address} returned HTTP {response.status_code}",
                status_code=response.status_code,
                address=address,
            )

    async def post_async(
        self,
        address: str,
        payload: bytes,
        encoding: str,
        is_compressed: bool = False,
    ) -> None:
        """Awaitable :meth:`post`, run in a worker thread."""
        await asyncio.to_thread(
            self.post, address, payload, encoding, is_compressed
        )

    def close(self) -> None:
        """Close the HTTP session."""
        with self._lock:
            if self._owns_session:
                self._session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
