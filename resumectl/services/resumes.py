"""Résumé listing, search and archive service."""

from __future__ import annotations

import builtins
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Optional

from resumectl.core.exceptions import ResourceNotFoundError, ValidationError
from resumectl.core.validation import validate_required_text
from resumectl.models.resume import Resume, ResumePage

from .base import BaseService

SORT_ORDERS = ("newest", "oldest")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def filter_resumes(resumes: Sequence[Resume], search: Optional[str]) -> list[Resume]:
    """Keep résumés matching ``search`` in name, summary, skills or titles."""
    if not search:
        return list(resumes)
    return [r for r in resumes if r.matches(search)]


def _created(resume: Resume) -> datetime:
    created = resume.created_at
    if created is None:
        return _EPOCH
    if created.tzinfo is None:
        return created.replace(tzinfo=timezone.utc)
    return created


def sort_resumes(resumes: Sequence[Resume], order: str = "newest") -> list[Resume]:
    """Sort by creation time, newest or oldest first.

    Raises:
        ValidationError: If the order is unknown.
    """
    if order not in SORT_ORDERS:
        raise ValidationError(f"Unknown sort order: {order}", field="sort", value=order)
    return sorted(resumes, key=_created, reverse=order == "newest")


class ResumeService(BaseService):
    """Service for stored résumés."""

    def list(self, page: int = 1, limit: int = 10) -> ResumePage:
        """Fetch one page of résumés.

        Args:
            page: Page number, from 1.
            limit: Page size.

        Returns:
            The page with the overall total.
        """
        data = self._get("file/resumes", params={"page": page, "limit": limit})
        if isinstance(data, list):
            data = {"data": data, "total": len(data)}
        return ResumePage.model_validate({**data, "page": page, "limit": limit})

    def total(self) -> int:
        """Number of stored résumés."""
        return self.list(page=1, limit=1).total

    def delete(self, resume_id: str) -> bool:
        """Delete a résumé by ID."""
        return self._delete(self._build_path("file/resume", resume_id))

    def get(self, resume_id: str) -> Resume:
        """Get one résumé.

        Raises:
            ResourceNotFoundError: If the résumé does not exist.
        """
        resume = self._parse_record(Resume, self._get(self._build_path("file", resume_id)))
        if resume is None:
            raise ResourceNotFoundError("resume", resume_id)
        return resume

    def search(self, query: str) -> builtins.list[Resume]:
        """Search all stored résumés on the server.

        Raises:
            ValidationError: If the query is blank.
        """
        query = validate_required_text(query, "query")
        data = self._post("file/search/resumes", json={"query": query})
        return [Resume.model_validate(r) for r in self._extract_results(data)]

    def archive(self, resume_id: str) -> bool:
        """Archive a résumé."""
        self._post(self._build_path("file", resume_id, "archive"))
        return True

    def unarchive(self, resume_id: str) -> bool:
        """Restore an archived résumé."""
        self._post(self._build_path("file", resume_id, "unarchive"))
        return True
