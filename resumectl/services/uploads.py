"""Bulk résumé upload service.

Validates a selection, splits the valid files into batches and sends the
batches one at a time. After a successful upload the backend keeps parsing
and ranking the files; it offers no status endpoint for that, so the
processing phase is a client-side estimate ticking once per second.

State per run::

    idle -> uploading -> upload_complete -> processing -> complete -> idle
    idle -> uploading -> failed -> idle
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from contextlib import ExitStack
from dataclasses import replace
from typing import TYPE_CHECKING, Optional

import httpx

from resumectl.core.exceptions import (
    OperationError,
    ResumeCtlError,
    TooManyFilesError,
    UploadError,
)
from resumectl.core.logging import log_context
from resumectl.core.notifier import NotificationQueue, Notifier
from resumectl.models.progress import (
    ProcessingEstimate,
    ProgressState,
    UploadSummary,
    upload_percent,
)
from resumectl.models.resume import UploadResponse
from resumectl.models.upload import (
    BatchFailed,
    BatchSucceeded,
    SelectedFile,
    SelectionResult,
    SelectionValidated,
    UploadBatch,
    UploadEvent,
    UploadState,
    UploadStats,
    reduce_stats,
)
from resumectl.uploaders.common import content_type_for, split_into_batches, validate_selection
from resumectl.uploaders.constants import (
    ALLOWED_EXTENSIONS,
    BATCH_SIZE,
    MAX_FILE_SIZE,
    MAX_FILES,
    PROCESSING_TICK_SECONDS,
    SECONDS_PER_FILE,
)

from .base import BaseService

if TYPE_CHECKING:
    from resumectl.core.client import ResumeClient

logger = logging.getLogger(__name__)

# Notification keys, one per logical operation
SELECTION_KEY = "selection"
UPLOAD_KEY = "upload"
PROCESSING_KEY = "processing"

ProgressCallback = Callable[[ProgressState], None]
CompleteCallback = Callable[[UploadStats], None]


class UploadService(BaseService):
    """Orchestrates one bulk upload session at a time."""

    def __init__(
        self,
        client: "ResumeClient",
        notifier: Optional[Notifier] = None,
        *,
        batch_size: int = BATCH_SIZE,
        max_files: int = MAX_FILES,
        max_file_size: int = MAX_FILE_SIZE,
        allowed_extensions: Sequence[str] = ALLOWED_EXTENSIONS,
        seconds_per_file: int = SECONDS_PER_FILE,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the upload service.

        Args:
            client: Backend client.
            notifier: Where user-facing messages go. Defaults to an
                in-memory NotificationQueue.
            batch_size: Files per upload request.
            max_files: Largest selection accepted.
            max_file_size: Per-file size limit in bytes.
            allowed_extensions: Accepted extensions, lowercase with dot.
            seconds_per_file: Estimated backend processing time per file.
            sleep: Called between processing ticks.
        """
        super().__init__(client)
        if batch_size <= 0:
            raise ValueError(f"Batch size must be positive: {batch_size}")
        self.notifier = notifier if notifier is not None else NotificationQueue()
        self.batch_size = batch_size
        self.max_files = max_files
        self.max_file_size = max_file_size
        self.allowed_extensions = tuple(allowed_extensions)
        self.seconds_per_file = seconds_per_file
        self.sleep = sleep

        self.state = UploadState.IDLE
        self.state_history: list[UploadState] = [UploadState.IDLE]
        self.stats = UploadStats()
        self.progress = ProgressState()
        self.pending: list[SelectedFile] = []

    # =========================================================================
    # State
    # =========================================================================

    def _transition(self, state: UploadState) -> None:
        logger.debug("Upload state %s -> %s", self.state.value, state.value)
        self.state = state
        self.state_history.append(state)

    def _apply(self, event: UploadEvent) -> None:
        self.stats = reduce_stats(self.stats, event)

    def _set_progress(
        self,
        on_progress: Optional[ProgressCallback],
        *,
        upload: Optional[int] = None,
        processing: Optional[int] = None,
    ) -> None:
        if upload is not None:
            self.progress = replace(self.progress, upload=upload)
        if processing is not None:
            self.progress = replace(self.progress, processing=processing)
        if on_progress is not None:
            on_progress(self.progress)

    # =========================================================================
    # Selection
    # =========================================================================

    def select(self, files: Sequence[SelectedFile]) -> Optional[SelectionResult]:
        """Validate a selection and keep its valid files for upload.

        A selection over the file limit is rejected as a whole: an error is
        shown and the current stats and pending files stay as they were.

        Returns:
            The validated selection, or None if it was rejected.
        """
        try:
            selection = validate_selection(
                files,
                max_files=self.max_files,
                allowed_extensions=self.allowed_extensions,
                max_file_size=self.max_file_size,
            )
        except TooManyFilesError as e:
            logger.warning("Rejected selection of %d files (max %d)", e.count, e.max_files)
            self.notifier.error(SELECTION_KEY, e.message, title="Too Many Files")
            return None

        if selection.invalid:
            self.notifier.warning(
                SELECTION_KEY, "\n".join(selection.errors), title="Some Files Invalid"
            )

        self.pending = list(selection.valid)
        self.progress = ProgressState()
        self._apply(SelectionValidated(selection, self.batch_size))
        logger.info(
            "Selected %d files: %d valid, %d invalid",
            selection.total,
            len(selection.valid),
            len(selection.invalid),
        )
        return selection

    # =========================================================================
    # Upload
    # =========================================================================

    def upload_batch(self, batch: UploadBatch) -> int:
        """Send one batch as a single multipart request.

        Returns:
            Number of files the server acknowledged.

        Raises:
            UploadError: If the request fails for any reason.
        """
        try:
            with log_context("batch upload", logger, batch=batch.index, files=len(batch)):
                with ExitStack() as stack:
                    parts = [
                        (f.name, stack.enter_context(f.open()), content_type_for(f))
                        for f in batch.files
                    ]
                    data = self.client.upload_files(parts)
                response = UploadResponse.model_validate(data)
        except ResumeCtlError as e:
            raise UploadError(batch.index, e.message, len(batch)) from e
        except (httpx.HTTPError, OSError, ValueError) as e:
            raise UploadError(batch.index, str(e) or type(e).__name__, len(batch)) from e

        return response.accepted

    def _upload_batches(
        self,
        batches: list[UploadBatch],
        on_progress: Optional[ProgressCallback],
    ) -> int:
        """Upload batches in order, stopping at the first failure."""
        processed = 0
        total = len(batches)

        for batch in batches:
            try:
                accepted = self.upload_batch(batch)
            except UploadError as e:
                self._apply(BatchFailed(batch, e.cause))
                raise

            processed += accepted
            self._apply(BatchSucceeded(batch, accepted))
            percent = upload_percent(self.stats.completed_batches, total)
            self._set_progress(on_progress, upload=percent)
            self.notifier.loading(
                UPLOAD_KEY,
                f"Uploading files... {percent}% (Batch {batch.index}/{total})",
                percent=percent,
            )

        return processed

    def _simulate_processing(
        self,
        processed: int,
        on_progress: Optional[ProgressCallback],
    ) -> None:
        """Tick the processing estimate until it reaches 100%."""
        estimate = ProcessingEstimate(processed, self.seconds_per_file)
        total = estimate.total_seconds
        self.notifier.loading(PROCESSING_KEY, "Processing files...", percent=0)

        elapsed = 0
        while elapsed < total:
            self.sleep(PROCESSING_TICK_SECONDS)
            elapsed += PROCESSING_TICK_SECONDS
            percent = estimate.percent(elapsed)
            self._set_progress(on_progress, processing=percent)
            self.notifier.loading(
                PROCESSING_KEY,
                f"Processing files... {percent}% ({elapsed}s/{total}s)",
                percent=percent,
            )

        self._set_progress(on_progress, processing=100)
        self.notifier.success(PROCESSING_KEY, "Processing complete!")

    def upload(
        self,
        *,
        wait_for_processing: bool = True,
        on_progress: Optional[ProgressCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
    ) -> UploadSummary:
        """Upload the pending files.

        Batches go out strictly one after another. The first failing batch
        stops the run; batches the server already accepted stay accepted.
        Whatever happens, the pending files are cleared and the service
        returns to idle so a new selection can be made.

        Args:
            wait_for_processing: Run the processing estimate after upload.
            on_progress: Called with every progress change.
            on_complete: Called with the final stats once processing is done.

        Returns:
            Summary whose state is the last phase reached before idle.
        """
        if self.state is not UploadState.IDLE:
            raise OperationError("upload", f"An upload is already {self.state.value}")

        if not self.pending:
            message = "Please select valid files to upload."
            self.notifier.error(UPLOAD_KEY, message)
            return UploadSummary(UploadState.IDLE, self.stats, self.progress, errors=[message])

        files = self.pending
        batches = split_into_batches(files, self.batch_size)
        reached = UploadState.IDLE
        errors: list[str] = []
        start = time.time()

        try:
            with log_context("upload", logger, files=len(files), batches=len(batches)):
                self._transition(UploadState.UPLOADING)
                self._set_progress(on_progress, upload=0, processing=0)
                self.notifier.loading(UPLOAD_KEY, "Preparing upload...", percent=0)

                processed = self._upload_batches(batches, on_progress)

                self._transition(UploadState.UPLOAD_COMPLETE)
                reached = UploadState.UPLOAD_COMPLETE
                self.notifier.success(UPLOAD_KEY, "Upload complete!")

                if wait_for_processing:
                    if processed > 0:
                        self._transition(UploadState.PROCESSING)
                        reached = UploadState.PROCESSING
                        self._simulate_processing(processed, on_progress)
                    self._transition(UploadState.COMPLETE)
                    reached = UploadState.COMPLETE
        except UploadError as e:
            self._transition(UploadState.FAILED)
            reached = UploadState.FAILED
            errors.append(str(e))
            self.notifier.error(UPLOAD_KEY, str(e))
        except Exception as e:
            logger.exception("Upload process failed")
            self._transition(UploadState.FAILED)
            reached = UploadState.FAILED
            errors.append(f"Upload failed: {e}")
            self.notifier.error(UPLOAD_KEY, "Upload failed!")
        finally:
            self.pending = []
            self._transition(UploadState.IDLE)

        summary = UploadSummary(
            state=reached,
            stats=self.stats,
            progress=self.progress,
            duration=time.time() - start,
            errors=errors,
        )

        if reached is UploadState.COMPLETE and on_complete is not None:
            on_complete(self.stats)

        return summary

    def run(
        self,
        files: Sequence[SelectedFile],
        **kwargs: object,
    ) -> Optional[UploadSummary]:
        """Select then upload in one call.

        Returns:
            The upload summary, or None if the selection was rejected.
        """
        if self.select(files) is None:
            return None
        return self.upload(**kwargs)  # type: ignore[arg-type]
