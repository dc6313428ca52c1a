"""Job description and candidate ranking models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import BaseModel
from .resume import Resume


class Job(BaseModel):
    """A job description that résumés are ranked against."""

    id: str = Field(..., alias="_id", description="Job ID")
    title: str = Field(..., description="Job title")
    company_name: str = Field("", description="Hiring company")
    location: str = Field("", description="Job location")
    job_type: str = Field("", description="Employment type")
    requirements: list[str] = Field(default_factory=list)
    archived: bool = False
    posted_on: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def table_columns(cls) -> list[str]:
        """Return columns for table output."""
        return ["id", "title", "company_name", "location", "job_type", "archived"]

    def matches(self, search: str) -> bool:
        """Case-insensitive substring match over title, company, location and type."""
        needle = search.lower()
        return any(
            needle in h.lower()
            for h in (self.title, self.company_name, self.location, self.job_type)
        )


class RankedResume(Resume):
    """A résumé scored against one job."""

    id: Optional[str] = Field(None, alias="_id", description="Résumé ID")
    rank: float = Field(0, description="Match score, 0-100")
    summary: Optional[str] = None
    technical_domain: Optional[str] = Field(None, alias="technicalDomain")
    business_domain: Optional[str] = Field(None, alias="businessDomain")

    @classmethod
    def table_columns(cls) -> list[str]:
        return ["rank", "id", "file_name", "top_skills", "job_titles"]


class CandidateRanking(BaseModel):
    """Ranked résumés for a job, as last computed by the backend."""

    result_files: list[RankedResume] = Field(default_factory=list, alias="resultFiles")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    def ordered(self) -> list[RankedResume]:
        """Best match first."""
        return sorted(self.result_files, key=lambda r: r.rank, reverse=True)
