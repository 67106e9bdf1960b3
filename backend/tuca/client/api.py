"""
HTTP client for the Tuca Noronha API used by the client-side stores
"""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"


class ApiError(Exception):
    """Non-2xx response from the API"""

    def __init__(self, status_code: int, message: str, payload: Any = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.payload = payload


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    if isinstance(body, dict):
        detail = body.get("detail") or body.get("message") or body.get("error")
        if isinstance(detail, str):
            return detail
    return response.reason_phrase or "Request failed"


class TucaApiClient:
    """Thin JSON wrapper over httpx that keeps the session cookie between calls.

    An existing ``httpx.Client`` (for instance a FastAPI ``TestClient``) can be
    injected; otherwise one is created against ``base_url``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self._owns_http = http is None
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout, follow_redirects=True)

    def request(
        self,
        method: str,
        path: str,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            response = self.http.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(0, str(e)) from e

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            try:
                payload = response.json()
            except ValueError:
                payload = None
            raise ApiError(response.status_code, message, payload)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Optional[Any] = None) -> Any:
        return self.request("POST", path, json=json)

    def patch(self, path: str, json: Optional[Any] = None) -> Any:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "TucaApiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
