"""Job description service."""

from __future__ import annotations

import builtins
import logging
from collections.abc import Sequence
from typing import Any, Optional

from resumectl.core.exceptions import ResourceNotFoundError, ValidationError
from resumectl.core.validation import validate_required_text, validate_requirements
from resumectl.models.job import CandidateRanking, Job

from .base import BaseService

logger = logging.getLogger(__name__)

JOB_FIELDS = ("title", "company_name", "location", "job_type")


def filter_jobs(
    jobs: Sequence[Job], search: Optional[str] = None, active_only: bool = False
) -> list[Job]:
    """Keep jobs matching ``search``, optionally dropping archived ones."""
    return [
        job
        for job in jobs
        if (not search or job.matches(search)) and not (active_only and job.archived)
    ]


class JobService(BaseService):
    """Service for job descriptions and their ranked candidates."""

    def list(self) -> builtins.list[Job]:
        """List every job description, archived ones included."""
        data = self._get("job")
        return [Job.model_validate(r) for r in self._extract_results(data)]

    def get(self, job_id: str) -> Job:
        """Get one job description.

        Raises:
            ResourceNotFoundError: If the job does not exist.
        """
        path = self._build_path("job", job_id)
        job = self._parse_record(Job, self._get(path))
        if job is None:
            raise ResourceNotFoundError("job", job_id)
        return job

    def create(
        self,
        title: str,
        company_name: str,
        location: str,
        job_type: str,
        requirements: Sequence[str],
    ) -> Optional[Job]:
        """Create a job description.

        Every text field is required and at least one requirement is needed.

        Returns:
            The created job when the backend echoes it, otherwise None.

        Raises:
            ValidationError: If a field is blank or requirements are missing.
        """
        payload: dict[str, Any] = {
            "title": validate_required_text(title, "title"),
            "company_name": validate_required_text(company_name, "company_name"),
            "location": validate_required_text(location, "location"),
            "job_type": validate_required_text(job_type, "job_type"),
            "requirements": validate_requirements(requirements),
        }
        logger.info("Creating job %r at %r", payload["title"], payload["company_name"])
        return self._parse_record(Job, self._post("job", json=payload))

    def update(
        self,
        job_id: str,
        *,
        requirements: Optional[Sequence[str]] = None,
        **fields: Optional[str],
    ) -> Optional[Job]:
        """Update selected fields of a job description.

        Args:
            job_id: Job ID.
            requirements: Replacement requirement list.
            **fields: Any of title, company_name, location, job_type.

        Raises:
            ValidationError: If nothing is given, a field is unknown or blank.
        """
        payload: dict[str, Any] = {}
        for name, value in fields.items():
            if name not in JOB_FIELDS:
                raise ValidationError(f"Unknown job field: {name}", field=name)
            if value is not None:
                payload[name] = validate_required_text(value, name)
        if requirements is not None:
            payload["requirements"] = validate_requirements(requirements)
        if not payload:
            raise ValidationError("Nothing to update")

        path = self._build_path("job", job_id)
        return self._parse_record(Job, self._put(path, json=payload))

    def archive(self, job_id: str) -> bool:
        """Archive a job description."""
        self._patch(self._build_path("job", job_id, "archive"))
        return True

    def unarchive(self, job_id: str) -> bool:
        """Restore an archived job description."""
        self._patch(self._build_path("job", job_id, "unarchive"))
        return True

    def ranking(self, job_id: str) -> CandidateRanking:
        """Fetch the last computed résumé ranking for a job."""
        data = self._get(self._build_path("job", job_id, "candidates", "rank"))
        return CandidateRanking.model_validate(self._extract_data(data) or {})

    def rerank(self, job_id: str) -> CandidateRanking:
        """Ask the backend to rank résumés again, then fetch the new ranking."""
        logger.info("Re-ranking candidates for job %s", job_id)
        self._put(self._build_path("job", job_id, "candidates", "rank"))
        return self.ranking(job_id)
