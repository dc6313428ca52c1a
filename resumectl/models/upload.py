"""Client-side upload state: selected files, validation, batches and stats.

Stats are only ever changed through :func:`reduce_stats`, which folds one
upload event into a new, immutable ``UploadStats``.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Optional, Union


# =============================================================================
# Files
# =============================================================================


@dataclass(frozen=True)
class SelectedFile:
    """A file chosen for upload, either on disk or held in memory."""

    name: str
    size: int
    path: Optional[Path] = None
    content: Optional[bytes] = field(default=None, repr=False)

    @classmethod
    def from_path(cls, path: Path) -> "SelectedFile":
        return cls(name=path.name, size=path.stat().st_size, path=path)

    @classmethod
    def from_bytes(cls, name: str, content: bytes) -> "SelectedFile":
        return cls(name=name, size=len(content), content=content)

    @property
    def extension(self) -> str:
        """Lowercased text after the last dot, with the dot.

        A name without a dot has no extension and yields an empty string.
        """
        if "." not in self.name:
            return ""
        return "." + self.name.rsplit(".", 1)[-1].lower()

    def open(self) -> BinaryIO:
        if self.content is not None:
            return io.BytesIO(self.content)
        if self.path is None:
            raise ValueError(f"{self.name} has neither a path nor content")
        return self.path.open("rb")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one file."""

    file: SelectedFile
    is_valid: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class SelectionResult:
    """A validated selection split into valid files and rejections."""

    total: int
    valid: list[SelectedFile]
    invalid: list[ValidationResult]

    @property
    def errors(self) -> list[str]:
        return [r.error for r in self.invalid if r.error]


@dataclass(frozen=True)
class UploadBatch:
    """Files sent together in one request. ``index`` counts from 1."""

    index: int
    files: list[SelectedFile]

    def __len__(self) -> int:
        return len(self.files)

    @property
    def size_bytes(self) -> int:
        return sum(f.size for f in self.files)


# =============================================================================
# Upload State
# =============================================================================


class UploadState(Enum):
    """Phases of one upload session."""

    IDLE = "idle"
    UPLOADING = "uploading"
    UPLOAD_COMPLETE = "upload_complete"
    PROCESSING = "processing"
    COMPLETE = "complete"
    FAILED = "failed"


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class SelectionValidated:
    selection: SelectionResult
    batch_size: int


@dataclass(frozen=True)
class BatchSucceeded:
    batch: UploadBatch
    accepted: int


@dataclass(frozen=True)
class BatchFailed:
    batch: UploadBatch
    error: str


UploadEvent = Union[SelectionValidated, BatchSucceeded, BatchFailed]


# =============================================================================
# Stats
# =============================================================================


@dataclass(frozen=True)
class UploadStats:
    """Aggregate counters for one upload session."""

    total: int = 0
    valid: int = 0
    invalid: int = 0
    succeeded: int = 0
    failed: int = 0
    total_batches: int = 0
    completed_batches: int = 0
    invalid_files: tuple[str, ...] = ()

    @property
    def processed(self) -> int:
        """Files the server acknowledged."""
        return self.succeeded

    def to_dict(self) -> dict[str, object]:
        return {
            "total": self.total,
            "valid": self.valid,
            "invalid": self.invalid,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "total_batches": self.total_batches,
            "completed_batches": self.completed_batches,
            "invalid_files": list(self.invalid_files),
        }


def reduce_stats(stats: UploadStats, event: UploadEvent) -> UploadStats:
    """Fold one event into the stats, returning a new instance.

    A validated selection starts a fresh session. Batch events only move
    the batch and file counters forward.
    """
    if isinstance(event, SelectionValidated):
        selection = event.selection
        valid = len(selection.valid)
        return UploadStats(
            total=selection.total,
            valid=valid,
            invalid=len(selection.invalid),
            total_batches=-(-valid // event.batch_size) if event.batch_size > 0 else 0,
            invalid_files=tuple(selection.errors),
        )
    if isinstance(event, BatchSucceeded):
        return replace(
            stats,
            succeeded=stats.succeeded + event.accepted,
            completed_batches=stats.completed_batches + 1,
        )
    if isinstance(event, BatchFailed):
        return replace(stats, failed=stats.failed + len(event.batch))
    raise TypeError(f"Unknown upload event: {event!r}")
