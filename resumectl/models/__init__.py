"""Data models for resumectl.

Pydantic models for backend payloads and dataclasses for upload state.
"""

from __future__ import annotations

from .base import BaseModel
from .candidate import Candidate, DashboardStats, JobMatchAnalysis, StatValue, WorkExperience
from .job import CandidateRanking, Job, RankedResume
from .progress import ProcessingEstimate, ProgressState, UploadSummary, upload_percent
from .resume import Resume, ResumePage, UploadResponse
from .upload import (
    BatchFailed,
    BatchSucceeded,
    SelectedFile,
    SelectionResult,
    SelectionValidated,
    UploadBatch,
    UploadEvent,
    UploadState,
    UploadStats,
    ValidationResult,
    reduce_stats,
)

__all__ = [
    # Base
    "BaseModel",
    # Backend payloads
    "Resume",
    "ResumePage",
    "UploadResponse",
    "Job",
    "RankedResume",
    "CandidateRanking",
    "Candidate",
    "WorkExperience",
    "JobMatchAnalysis",
    "DashboardStats",
    "StatValue",
    # Upload state
    "SelectedFile",
    "ValidationResult",
    "SelectionResult",
    "UploadBatch",
    "UploadState",
    "UploadStats",
    "UploadEvent",
    "SelectionValidated",
    "BatchSucceeded",
    "BatchFailed",
    "reduce_stats",
    # Progress
    "ProgressState",
    "ProcessingEstimate",
    "UploadSummary",
    "upload_percent",
]
