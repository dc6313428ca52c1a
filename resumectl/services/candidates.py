"""Candidate service."""

from __future__ import annotations

import builtins
from collections.abc import Sequence
from typing import Any, Optional

from resumectl.core.exceptions import ResourceNotFoundError, ValidationError
from resumectl.core.validation import validate_email, validate_required_text
from resumectl.models.candidate import Candidate, DashboardStats

from .base import BaseService


class CandidateService(BaseService):
    """Service for candidate profiles."""

    def list(
        self, query: Optional[str] = None, page: int = 1, limit: int = 10
    ) -> builtins.list[Candidate]:
        """List candidates, searched on the server.

        Args:
            query: Free-text search; omitted when empty.
            page: Page number, from 1.
            limit: Page size.
        """
        params: dict[str, Any] = {"page": page, "limit": limit}
        if query:
            params["query"] = query
        data = self._get("candidate", params=params)
        return [Candidate.model_validate(r) for r in self._extract_results(data)]

    def get(self, candidate_id: str) -> Candidate:
        """Get one candidate.

        Raises:
            ResourceNotFoundError: If the candidate does not exist.
        """
        path = self._build_path("candidate", candidate_id)
        candidate = self._parse_record(Candidate, self._get(path))
        if candidate is None:
            raise ResourceNotFoundError("candidate", candidate_id)
        return candidate

    def update(
        self,
        candidate_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        skills: Optional[Sequence[str]] = None,
    ) -> Optional[Candidate]:
        """Update a candidate's name, email or skills.

        Raises:
            ValidationError: If nothing is given or a value is invalid.
        """
        payload: dict[str, Any] = {}
        if name is not None:
            payload["name"] = validate_required_text(name, "name")
        if email is not None:
            payload["email"] = validate_email(email)
        if skills is not None:
            payload["skills"] = [s.strip() for s in skills if s.strip()]
        if not payload:
            raise ValidationError("Nothing to update")

        path = self._build_path("candidate", candidate_id)
        return self._parse_record(Candidate, self._put(path, json=payload))

    def dashboard(self) -> DashboardStats:
        """Fetch the recruiter dashboard counters."""
        data = self._get("common/dashboard/stats")
        return DashboardStats.model_validate(self._extract_data(data) or {})
