"""Ishaazi API client: lowest level, sends the request and maps failures onto the error taxonomy."""
from typing import Any

import httpx

from ishaazi.client.config import ClientConfig
from ishaazi.client.token_store import TokenStore
from ishaazi.core.errors import MSG_TOKEN_MISSING, AuthorizationError, NetworkError, http_status_to_error


class ApiClient:
    """JSON-over-HTTP client for the engagement and notification routes."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        http_client: httpx.Client | None = None,
        token_store: TokenStore | None = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=self._config.timeout)
        self.token_store = token_store or TokenStore(self._config.storage_path)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _headers(self, *, auth: bool) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.token_store.token if auth else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        auth: bool = False,
        require_token: bool = False,
    ) -> dict[str, Any]:
        """
        Send one request and return the decoded JSON body.
        auth: attach the stored bearer token when there is one.
        require_token: raise AuthorizationError before sending when no token is stored.
        """
        if require_token and not self.token_store.token:
            raise AuthorizationError(MSG_TOKEN_MISSING)
        url = f"{self._config.base_url}{path}"
        try:
            r = self._http.request(
                method,
                url,
                json=json_body,
                params=params,
                headers=self._headers(auth=auth or require_token),
            )
        except httpx.HTTPError as e:
            raise NetworkError(f"{method} {path} failed: {e}") from e
        if not r.is_success:
            raise http_status_to_error(r.status_code, _error_detail(r))
        if not r.content:
            return {}
        try:
            data = r.json()
        except ValueError as e:
            raise NetworkError(f"{method} {path}: response is not JSON") from e
        return data if isinstance(data, dict) else {"data": data}

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _error_detail(r: httpx.Response) -> str | None:
    try:
        body = r.json()
    except ValueError:
        return r.text[:500] if r.text else None
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("message")
        if isinstance(detail, str):
            return detail
        if detail is not None:
            return str(detail)[:500]
    return None
