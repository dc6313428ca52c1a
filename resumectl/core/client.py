"""HTTP client for the recruiting backend REST API.

Provides bearer-token auth, retry for idempotent requests, error mapping and
multipart file upload.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from resumectl.core.exceptions import (
    ApiError,
    AuthenticationError,
    NetworkError,
    PermissionDeniedError,
    ResourceNotFoundError,
    RetryExhaustedError,
    ServerUnreachableError,
)
from resumectl.core.validation import validate_server_url

# =============================================================================
# Constants
# =============================================================================

DEFAULT_TIMEOUT = 600
DEFAULT_MAX_RETRIES = 3
RETRY_BACKOFF_BASE = 2
RETRYABLE_STATUS_CODES = {502, 503, 504}

UPLOAD_PATH = "file/upload/bulk"
UPLOAD_FIELD = "files"


def _error_message(resp: httpx.Response) -> str:
    """Pull the backend's ``message`` field out of an error body."""
    try:
        body = resp.json()
    except ValueError:
        return ""
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str):
            return message
    return ""


# =============================================================================
# ResumeClient
# =============================================================================


@dataclass
class ResumeClient:
    """HTTP client for the résumé endpoints with retry and error mapping."""

    base_url: str
    token: str | None = None
    timeout: int = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    verify_ssl: bool = True
    _client: httpx.Client | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate and normalize URL."""
        self.base_url = validate_server_url(self.base_url)

    # =========================================================================
    # Client Management
    # =========================================================================

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url + "/",
                timeout=self.timeout,
                verify=self.verify_ssl,
                follow_redirects=True,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> ResumeClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @property
    def is_authenticated(self) -> bool:
        """Check if client carries an API token."""
        return bool(self.token)

    def _get_headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers: dict[str, str] = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if extra:
            headers.update(extra)
        return headers

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    def _check_response(self, resp: httpx.Response, path: str) -> httpx.Response:
        """Map error statuses onto the exception hierarchy."""
        if resp.status_code == 401:
            raise AuthenticationError(
                self.base_url, _error_message(resp) or "Token missing or expired"
            )
        if resp.status_code == 403:
            raise PermissionDeniedError(path)
        if resp.status_code == 404:
            raise ResourceNotFoundError("resource", path)
        if resp.is_error:
            raise ApiError(resp.status_code, _error_message(resp), path=path)
        return resp

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any | None = None,
        files: Any | None = None,
        headers: dict[str, str] | None = None,
        retries: int | None = None,
    ) -> httpx.Response:
        """Execute HTTP request with retry logic.

        Args:
            method: HTTP method.
            path: API path relative to the base URL.
            params: Query parameters.
            json: JSON body.
            files: Multipart file parts.
            headers: Additional headers.
            retries: Override for the retry count (0 disables retrying).

        Returns:
            HTTP response.

        Raises:
            AuthenticationError: On 401.
            PermissionDeniedError: On 403.
            ResourceNotFoundError: On 404.
            ApiError: On any other non-2xx status.
            NetworkError: On a transport failure with retries disabled.
            RetryExhaustedError: If all retries fail.
        """
        client = self._get_client()
        path = path.lstrip("/")
        max_retries = self.max_retries if retries is None else retries
        last_error: Exception | None = None

        for attempt in range(max_retries + 1):
            try:
                resp = client.request(
                    method,
                    path,
                    params=params,
                    json=json,
                    files=files,
                    headers=self._get_headers(headers),
                )
            except httpx.ConnectError:
                last_error = ServerUnreachableError(self.base_url)
            except httpx.TimeoutException:
                last_error = NetworkError(self.base_url, f"Timeout after {self.timeout}s")
            except httpx.TransportError as e:
                last_error = NetworkError(self.base_url, str(e) or type(e).__name__)
            else:
                if resp.status_code in RETRYABLE_STATUS_CODES and attempt < max_retries:
                    last_error = ApiError(resp.status_code, path=path)
                else:
                    return self._check_response(resp, path)

            if attempt < max_retries:
                time.sleep(RETRY_BACKOFF_BASE ** (attempt + 1))

        if max_retries == 0 and last_error is not None:
            raise last_error
        raise RetryExhaustedError(f"{method} {path}", max_retries + 1, last_error)

    def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """GET request."""
        return self._request("GET", path, params=params)

    def post(
        self,
        path: str,
        *,
        json: Any | None = None,
        files: Any | None = None,
        retries: int | None = None,
    ) -> httpx.Response:
        """POST request."""
        return self._request("POST", path, json=json, files=files, retries=retries)

    def put(self, path: str, *, json: Any | None = None) -> httpx.Response:
        """PUT request."""
        return self._request("PUT", path, json=json)

    def patch(self, path: str, *, json: Any | None = None) -> httpx.Response:
        """PATCH request."""
        return self._request("PATCH", path, json=json)

    def delete(self, path: str) -> httpx.Response:
        """DELETE request."""
        return self._request("DELETE", path)

    # =========================================================================
    # Convenience Methods
    # =========================================================================

    def get_json(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        """GET request returning JSON."""
        return self.get(path, params=params).json()

    def upload_files(self, parts: list[tuple[str, Any, str]]) -> Any:
        """Send files as one multipart request under a shared field.

        Args:
            parts: ``(file_name, binary_stream, content_type)`` per file.

        Returns:
            Parsed JSON response.
        """
        files = [(UPLOAD_FIELD, part) for part in parts]
        resp = self.post(UPLOAD_PATH, files=files, retries=0)
        return resp.json()

    def ping(self) -> dict[str, Any]:
        """Check server connectivity against the résumé listing.

        Returns:
            Dict with server info.
        """
        start = time.time()
        self.get("file/resumes", params={"page": 1, "limit": 1})
        latency = int((time.time() - start) * 1000)

        return {
            "url": self.base_url,
            "status": "ok",
            "latency_ms": latency,
        }
