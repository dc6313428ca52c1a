"""Base service with common methods for backend services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, TypeVar

from pydantic import BaseModel

if TYPE_CHECKING:
    from resumectl.core.client import ResumeClient

M = TypeVar("M", bound=BaseModel)


class BaseService:
    """Base service class with common functionality."""

    def __init__(self, client: "ResumeClient") -> None:
        """Initialize service with a backend client.

        Args:
            client: ResumeClient instance carrying the API token.
        """
        self.client = client

    def _get(self, path: str, **kwargs: Any) -> Any:
        """Execute GET request and return JSON data."""
        resp = self.client.get(path, **kwargs)
        return resp.json()

    def _post(self, path: str, **kwargs: Any) -> Any:
        """Execute POST request and return JSON data or response text."""
        resp = self.client.post(path, **kwargs)
        return _body(resp)

    def _put(self, path: str, **kwargs: Any) -> Any:
        """Execute PUT request and return JSON data or response text."""
        resp = self.client.put(path, **kwargs)
        return _body(resp)

    def _patch(self, path: str, **kwargs: Any) -> Any:
        """Execute PATCH request and return JSON data or response text."""
        resp = self.client.patch(path, **kwargs)
        return _body(resp)

    def _delete(self, path: str) -> bool:
        """Execute DELETE request."""
        self.client.delete(path)
        return True

    def _extract_data(self, data: Any) -> Any:
        """Unwrap the ``{"data": ...}`` envelope around most payloads.

        Args:
            data: Raw response data.

        Returns:
            The enveloped payload, or ``data`` itself when it is bare.
        """
        if isinstance(data, dict) and "data" in data:
            return data["data"]
        return data

    def _extract_results(self, data: Any) -> list[dict[str, Any]]:
        """Extract a list of records from an enveloped or bare response."""
        results = self._extract_data(data)
        return results if isinstance(results, list) else []

    def _parse_record(self, model: type[M], data: Any) -> Optional[M]:
        """Parse one record, or return None when the body carries no record."""
        record = self._extract_data(data)
        if isinstance(record, dict) and record.get("_id"):
            return model.model_validate(record)
        return None

    def _build_path(self, *parts: str) -> str:
        """Build API path from parts."""
        return "/".join(p.strip("/") for p in parts if p)


def _body(resp: Any) -> Any:
    if resp.headers.get("content-type", "").startswith("application/json"):
        return resp.json()
    return resp.text
