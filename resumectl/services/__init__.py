"""Service layer for resumectl.

Provides service classes that encapsulate the backend's résumé, job and
candidate operations.
"""

from __future__ import annotations

from .base import BaseService
from .candidates import CandidateService
from .jobs import JobService, filter_jobs
from .resumes import ResumeService, filter_resumes, sort_resumes
from .uploads import UploadService

__all__ = [
    "BaseService",
    "CandidateService",
    "JobService",
    "ResumeService",
    "UploadService",
    "filter_jobs",
    "filter_resumes",
    "sort_resumes",
]
