"""
Remote call transport.

The clients hand a service name, a method name and an encoded request to a
Transport and get the encoded response back. HttpTransport speaks unary
Connect-style JSON over HTTP using a shared requests.Session.
"""

import threading
import time
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import requests

# Error codes for responses without a JSON error body, keyed by HTTP status.
HTTP_STATUS_CODES = {
    401: "unauthenticated",
    403: "permission_denied",
    404: "unimplemented",
    429: "unavailable",
    502: "unavailable",
    503: "unavailable",
    504: "unavailable",
}


class RemoteCallError(Exception):
    """A remote call failed. Carries the protocol error code and message."""

    def __init__(self, code: str, message: str):
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


class CallContext:
    """
    Cancellation token for a single call or a group of calls.

    A context is cancelled explicitly with cancel() or implicitly once its
    timeout (seconds, measured from construction) has elapsed.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = threading.Event()

    def cancel(self):
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_done(self):
        if self.cancelled:
            raise RemoteCallError("canceled", "context canceled")
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise RemoteCallError("deadline_exceeded", "context deadline exceeded")


@runtime_checkable
class Transport(Protocol):
    """Sends an encoded request to service/method and returns the encoded response."""

    def invoke(
        self,
        service: str,
        method: str,
        payload: Dict[str, Any],
        ctx: Optional[CallContext] = None,
    ) -> Dict[str, Any]:
        ...


class HttpTransport:
    """Unary JSON-over-HTTP transport on a shared requests.Session."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Connect-Protocol-Version": "1",
        })

    def url_for(self, service: str, method: str) -> str:
        return f"{self.base_url}/{service}/{method}"

    def invoke(
        self,
        service: str,
        method: str,
        payload: Dict[str, Any],
        ctx: Optional[CallContext] = None,
    ) -> Dict[str, Any]:
        """POST the request and return the decoded JSON response body.

        Raises:
            RemoteCallError: On cancellation, timeout, connection failure or
                an error response or unreadable body from the server
        """
        ctx = ctx if ctx is not None else CallContext()
        ctx.raise_if_done()
        url = self.url_for(service, method)
        try:
            resp = self.session.post(url, json=payload, timeout=ctx.remaining())
        except requests.exceptions.Timeout as e:
            raise RemoteCallError("deadline_exceeded", f"{service}/{method} timed out") from e
        except requests.exceptions.ConnectionError as e:
            raise RemoteCallError("unavailable", f"{url}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise RemoteCallError("unknown", f"{url}: {e}") from e

        if resp.status_code != 200:
            raise self._error_from_response(resp)
        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as e:
            raise RemoteCallError("internal", f"{service}/{method}: response is not JSON: {e}") from e

    @staticmethod
    def _error_from_response(resp) -> RemoteCallError:
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("code"):
            return RemoteCallError(body["code"], body.get("message", ""))
        code = HTTP_STATUS_CODES.get(resp.status_code, "unknown")
        return RemoteCallError(code, f"HTTP {resp.status_code}")

    def close(self):
        self.session.close()
