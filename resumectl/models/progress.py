"""Progress models for upload sessions.

Upload progress is exact (completed batches over total batches). Processing
progress is an estimate: the backend gives no completion signal, so it is
derived from elapsed time against a fixed number of seconds per file.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List

from resumectl.models.upload import UploadState, UploadStats


def _clamp(value: float) -> int:
    return max(0, min(100, math.floor(value + 0.5)))


def upload_percent(completed: int, total: int) -> int:
    """Percentage of batches settled, rounded half up."""
    if total <= 0:
        return 0
    return _clamp(100 * completed / total)


@dataclass(frozen=True)
class ProgressState:
    """Upload and processing percentages, each in [0, 100]."""

    upload: int = 0
    processing: int = 0


@dataclass(frozen=True)
class ProcessingEstimate:
    """Simulated server-side processing time for accepted files."""

    processed: int
    seconds_per_file: int

    @property
    def total_seconds(self) -> int:
        return self.processed * self.seconds_per_file

    def percent(self, elapsed: int) -> int:
        if self.total_seconds <= 0:
            return 100
        return _clamp(100 * elapsed / self.total_seconds)


@dataclass
class UploadSummary:
    """Outcome of one upload run."""

    state: UploadState
    stats: UploadStats
    progress: ProgressState
    duration: float = 0.0
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors and self.stats.failed == 0 and self.stats.valid > 0

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "state": self.state.value,
            **self.stats.to_dict(),
            "upload_progress": self.progress.upload,
            "processing_progress": self.progress.processing,
            "duration": round(self.duration, 2),
            "errors": list(self.errors),
        }
