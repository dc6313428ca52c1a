"""Candidate and dashboard models."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from .base import BaseModel


class WorkExperience(BaseModel):
    """One position from a candidate's history."""

    title: Optional[str] = None
    company: Optional[str] = None
    duration: Optional[str] = None


class JobMatchAnalysis(BaseModel):
    """Strengths and gaps the backend extracted for a candidate."""

    key_strengths: list[str] = Field(default_factory=list, alias="keyStrengths")
    potential_gaps: list[str] = Field(default_factory=list, alias="potentialGaps")


class Candidate(BaseModel):
    """A candidate profile built from one or more résumés."""

    id: str = Field(..., alias="_id", description="Candidate ID")
    name: str = Field("", description="Full name")
    email: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    resume_ids: list[str] = Field(default_factory=list, alias="resumeIds")
    work_experience: list[WorkExperience] = Field(default_factory=list, alias="workExperience")
    job_match_analysis: JobMatchAnalysis = Field(
        default_factory=JobMatchAnalysis, alias="jobMatchAnalysis"
    )
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def table_columns(cls) -> list[str]:
        """Return columns for table output."""
        return ["id", "name", "email", "skills", "created_at"]

    def details(self) -> dict[str, Any]:
        """Flatten the profile for key/value output."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "skills": self.skills,
            "resumes": self.resume_ids,
            "experience": [
                " at ".join(p for p in (w.title, w.company) if p)
                + (f" ({w.duration})" if w.duration else "")
                for w in self.work_experience
            ],
            "key_strengths": self.job_match_analysis.key_strengths,
            "potential_gaps": self.job_match_analysis.potential_gaps,
            "created_at": self.created_at,
        }


class StatValue(BaseModel):
    """A dashboard counter with display metadata."""

    value: int = 0
    meta: dict[str, Any] = Field(default_factory=dict)


class DashboardStats(BaseModel):
    """Headline counters shown on the recruiter dashboard."""

    total_candidates: StatValue = Field(default_factory=StatValue, alias="totalCandidates")
    processed_today: StatValue = Field(default_factory=StatValue, alias="processedToday")
    pending_process: StatValue = Field(default_factory=StatValue, alias="pendingProcess")

    def summary(self) -> dict[str, Any]:
        return {
            "total_candidates": self.total_candidates.value,
            "processed_today": self.processed_today.value,
            "pending_process": self.pending_process.value,
            "estimated_time": self.pending_process.meta.get("estimatedTime"),
        }
