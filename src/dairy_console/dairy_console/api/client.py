from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from ..core.exceptions import ApiError, UnauthorizedError

logger = logging.getLogger(__name__)


@dataclass
class ApiConfig:
    base_url: str
    timeout: float = 15


class ApiClient:
    """Thin HTTP wrapper around the dairy REST backend.

    Every request gets the JSON content type and, when the token provider
    returns one, a bearer token. Non-2xx answers are turned into ApiError
    carrying the backend's ``message``; 401/403 become UnauthorizedError.
    There is no retry or caching.
    """

    def __init__(
        self,
        config: ApiConfig,
        *,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        session: Optional[requests.Session] = None,
    ):
        self._config = config
        self._token_provider = token_provider
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self._config.base_url.rstrip("/")

    def auth_headers(self) -> dict:
        token = self._token_provider() if self._token_provider else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Any = None,
        params: Optional[dict] = None,
        headers: Optional[dict] = None,
    ) -> Any:
        url = f"{self.base_url}{endpoint}"
        merged = {"Content-Type": "application/json", **self.auth_headers(), **(headers or {})}

        try:
            response = self._session.request(
                method,
                url,
                json=json,
                params=params,
                headers=merged,
                timeout=self._config.timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, endpoint, e)
            raise ApiError("Network error occurred") from e

        logger.debug("%s %s -> %s", method, endpoint, response.status_code)

        if response.status_code in (401, 403):
            raise UnauthorizedError(response.status_code)

        if not response.ok:
            message, errors = _error_details(response)
            raise ApiError(message, response.status_code, errors)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise ApiError("Invalid JSON in backend response", response.status_code)

    def get(self, endpoint: str, *, params: Optional[dict] = None) -> Any:
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, data: Any) -> Any:
        return self.request("POST", endpoint, json=data)

    def put(self, endpoint: str, data: Any) -> Any:
        return self.request("PUT", endpoint, json=data)

    def delete(self, endpoint: str) -> Any:
        return self.request("DELETE", endpoint)


def _error_details(response: requests.Response) -> tuple[str, dict]:
    fallback = f"HTTP {response.status_code}: {response.reason}"
    try:
        body = response.json()
    except ValueError:
        return fallback, {}
    if not isinstance(body, dict):
        return fallback, {}
    return str(body.get("message") or fallback), body.get("errors") or {}
