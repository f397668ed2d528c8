from typing import Any, Dict, Optional
import logging

import httpx

from .exceptions import SyncClientError, RemoteHTTPError, RateLimitError, ResponseFormatError


class RestClient:
    """
    Thin JSON transport over ``httpx.Client``.

    Every non-2xx response is raised as RemoteHTTPError (RateLimitError for
    429) carrying the status code and, when the body provides them, the remote
    error code and description. Network failures are raised as SyncClientError.

    Example:
        >>> with RestClient("https://r1-api.dotdigital.com", auth=httpx.BasicAuth("user", "pass")) as client:
        ...     client.get("/v2/data-fields")
    """

    def __init__(
        self,
        base_url: str,
        *,
        auth: Optional[httpx.Auth] = None,
        timeout: float = 10.0,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self._client = httpx.Client(
            auth=auth,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        body: Any = None,
    ) -> Any:
        url = self.url_for(endpoint)
        self.logger.debug("%s %s", method, url)
        try:
            response = self._client.request(method, url, params=params, json=body)
        except httpx.RequestError as e:
            self.logger.error("Error making %s request to %s: %s", method, url, e)
            raise SyncClientError(f"Request failed: {e}") from e

        if not response.is_success:
            code, description = self._error_details(response)
            error_cls = RateLimitError if response.status_code == 429 else RemoteHTTPError
            self.logger.error("%s %s failed with status %s: %s", method, url, response.status_code, description)
            raise error_cls(response.status_code, code, description, url=url)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ResponseFormatError(f"Invalid response format: {e}") from e

    @staticmethod
    def _error_details(response: httpx.Response):
        try:
            data = response.json()
        except ValueError:
            return None, response.text or response.reason_phrase

        if not isinstance(data, dict):
            return None, str(data)

        code = data.get("errorCode") or data.get("code")
        description = data.get("description") or data.get("message") or data.get("error")
        return (str(code) if code is not None else None), description

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, body: Any, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("POST", endpoint, params=params, body=body)

    def put(self, endpoint: str, body: Any, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("PUT", endpoint, params=params, body=body)

    def patch(self, endpoint: str, body: Any, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("PATCH", endpoint, params=params, body=body)

    def delete(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("DELETE", endpoint, params=params)

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
