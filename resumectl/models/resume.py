"""Résumé models returned by the backend."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from .base import BaseModel


class Resume(BaseModel):
    """A stored résumé with the summary fields the backend extracts."""

    id: str = Field(..., alias="_id", description="Résumé ID")
    file_name: str = Field(..., alias="fileName", description="Original file name")
    mime_type: Optional[str] = Field(None, alias="mimeType", description="MIME type")
    short_description: Optional[str] = Field(
        None, alias="shortDescription", description="Generated summary"
    )
    top_skills: list[str] = Field(default_factory=list, alias="topSkills")
    job_titles: list[str] = Field(default_factory=list, alias="jobTitles")
    archived: bool = False
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    @classmethod
    def table_columns(cls) -> list[str]:
        """Return columns for table output."""
        return ["id", "file_name", "top_skills", "job_titles", "created_at"]

    def matches(self, search: str) -> bool:
        """Case-insensitive substring match over the searchable fields."""
        needle = search.lower()
        haystacks = [
            self.file_name,
            self.short_description or "",
            " ".join(self.top_skills),
            " ".join(self.job_titles),
        ]
        return any(needle in h.lower() for h in haystacks)


class ResumePage(BaseModel):
    """One page of the résumé listing."""

    data: list[Resume] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def pages(self) -> int:
        if self.limit <= 0:
            return 0
        return -(-self.total // self.limit)


class UploadResponse(BaseModel):
    """Bulk upload acknowledgement.

    Only the length of ``results`` is relied upon; its entries are opaque.
    A body without ``results`` is rejected.
    """

    results: list[Any] = Field(..., description="One entry per accepted file")

    @property
    def accepted(self) -> int:
        return len(self.results)
