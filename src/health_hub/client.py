"""
Async REST transport for the Health Hub backend.

Every request carries the session's bearer token. A 401 answer clears
the session and raises SessionExpiredError so the caller can decide
where to send the user next.
"""

import logging
from typing import Any, Optional

import httpx

from .errors import RemoteError, RemoteUnavailableError, SessionExpiredError
from .session import Session

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_TIMEOUT = 120.0  # seconds


class HealthHubClient:
    """
    JSON-over-HTTP client bound to one user session.

    The underlying httpx.AsyncClient is created lazily (over ``transport``
    when one is given) unless a shared client is passed in as ``http``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        session: Optional[Session] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        http: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or Session()
        self.timeout = timeout
        self.transport = transport
        self._http = http
        self._owns_http = http is None

    async def __aenter__(self) -> "HealthHubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout), transport=self.transport
            )
        return self._http

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Any = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body (None when empty).

        Raises:
            SessionExpiredError: backend answered 401 for an authenticated request
            RemoteUnavailableError: connection failure or timeout
            RemoteError: any other non-2xx answer
        """
        url = f"{self.base_url}{path}"
        try:
            response = await self._client().request(
                method, url, params=params, json=json, headers=self._headers()
            )
        except httpx.TimeoutException as e:
            logger.error(f"[CLIENT] {method} {path} timed out: {e}")
            raise RemoteUnavailableError(
                "The Health Hub backend took too long to respond.", path=path, timed_out=True
            ) from e
        except httpx.TransportError as e:
            logger.error(f"[CLIENT] {method} {path} failed: {e}")
            raise RemoteUnavailableError(
                "Cannot connect to the Health Hub backend.", path=path
            ) from e

        if response.status_code == 401 and self.session.token:
            logger.warning(f"[CLIENT] {method} {path} unauthorized; clearing session")
            self.session.invalidate()
            raise SessionExpiredError()

        body = _decode(response)

        if response.status_code >= 400:
            message = _error_message(body) or f"Request failed with status {response.status_code}"
            logger.error(f"[CLIENT] {method} {path} -> {response.status_code}: {message}")
            raise RemoteError(message, status_code=response.status_code, path=path)

        return body

    async def get(self, path: str, params: Optional[dict] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_message(body: Any) -> Optional[str]:
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if isinstance(body.get(key), str):
                return body[key]
    if isinstance(body, str) and body:
        return body
    return None
