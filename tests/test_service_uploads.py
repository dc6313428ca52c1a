"""Unit tests for UploadService."""

from __future__ import annotations

from unittest.mock import MagicMock

import httpx
import pytest

from resumectl.core.exceptions import ApiError, OperationError
from resumectl.core.notifier import NotificationLevel, NotificationQueue
from resumectl.models.upload import SelectedFile, UploadState
from resumectl.services.uploads import (
    PROCESSING_KEY,
    SELECTION_KEY,
    UPLOAD_KEY,
    UploadService,
)


@pytest.fixture
def notifier() -> NotificationQueue:
    return NotificationQueue()


@pytest.fixture
def sleep() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(mock_client: MagicMock, notifier: NotificationQueue, sleep: MagicMock) -> UploadService:
    """UploadService with a mock client and no real waiting."""
    return UploadService(mock_client, notifier, sleep=sleep)


def _fail_on_call(n: int, error: Exception):
    """upload_files side effect that fails on the n-th call."""
    calls = {"count": 0}

    def _upload(parts):
        calls["count"] += 1
        if calls["count"] == n:
            raise error
        return {"results": [{} for _ in parts]}

    return _upload


# =============================================================================
# Selection
# =============================================================================


class TestSelect:
    """Tests for UploadService.select."""

    def test_valid_selection_sets_stats(self, service: UploadService, make_files):
        selection = service.select(make_files(3))

        assert selection is not None
        assert service.stats.total == 3
        assert service.stats.valid == 3
        assert service.stats.invalid == 0
        assert service.stats.total_batches == 1
        assert len(service.pending) == 3

    def test_invalid_file_reported(self, service: UploadService, notifier: NotificationQueue):
        service.select([SelectedFile("resume.docx", 100)])

        assert service.stats.total == 1
        assert service.stats.valid == 0
        assert service.stats.invalid == 1
        assert service.stats.invalid_files == (
            "resume.docx: File type not supported. Please upload only PDF or TXT files.",
        )
        note = notifier.get(SELECTION_KEY)
        assert note is not None
        assert note.level is NotificationLevel.WARNING
        assert note.title == "Some Files Invalid"

    def test_invalid_files_aggregated_in_one_notification(
        self, service: UploadService, notifier: NotificationQueue
    ):
        service.select([SelectedFile("a.doc", 1), SelectedFile("b.pdf", 1), SelectedFile("c.png", 1)])

        assert len(notifier.history) == 1
        message = notifier.history[0].message
        assert "a.doc" in message and "c.png" in message

    def test_too_many_files_rejected_without_touching_stats(
        self, service: UploadService, notifier: NotificationQueue, make_files
    ):
        service.select(make_files(2))
        before = service.stats

        result = service.select(make_files(60))

        assert result is None
        assert service.stats == before
        assert len(service.pending) == 2
        note = notifier.get(SELECTION_KEY)
        assert note.level is NotificationLevel.ERROR
        assert note.title == "Too Many Files"
        assert "50" in note.message

    def test_new_selection_resets_stats(self, service: UploadService, make_files):
        service.run(make_files(6), wait_for_processing=False)
        service.select(make_files(2))

        assert service.stats.succeeded == 0
        assert service.stats.completed_batches == 0
        assert service.stats.total_batches == 1


# =============================================================================
# Upload
# =============================================================================


class TestUpload:
    """Tests for UploadService.upload."""

    def test_single_batch_then_processing(
        self, service: UploadService, mock_client: MagicMock, sleep: MagicMock, make_files
    ):
        summary = service.run(make_files(3))

        assert summary is not None
        assert summary.state is UploadState.COMPLETE
        assert summary.success
        assert mock_client.upload_files.call_count == 1
        assert summary.stats.succeeded == 3
        assert summary.stats.total_batches == 1
        # 3 files at 12 seconds each
        assert sleep.call_count == 36
        assert summary.progress.upload == 100
        assert summary.progress.processing == 100

    def test_two_batches_progress(self, service: UploadService, make_files):
        seen: list[int] = []

        summary = service.run(
            make_files(7, ext=".txt"),
            wait_for_processing=False,
            on_progress=lambda p: seen.append(p.upload),
        )

        assert summary.stats.total_batches == 2
        assert summary.stats.succeeded == 7
        assert 50 in seen
        assert seen[-1] == 100
        assert seen == sorted(seen)

    def test_batches_sent_in_order_with_shared_field(
        self, service: UploadService, mock_client: MagicMock, make_files
    ):
        files = make_files(6)

        service.run(files, wait_for_processing=False)

        sent = [[name for name, _, _ in c.args[0]] for c in mock_client.upload_files.call_args_list]
        assert sent == [[f.name for f in files[:5]], [files[5].name]]
        content_types = {ct for c in mock_client.upload_files.call_args_list for _, _, ct in c.args[0]}
        assert content_types == {"application/pdf"}

    def test_progress_messages_replace_each_other(
        self, service: UploadService, notifier: NotificationQueue, make_files
    ):
        service.run(make_files(10), wait_for_processing=False)

        assert notifier.messages(UPLOAD_KEY) == [
            "Preparing upload...",
            "Uploading files... 50% (Batch 1/2)",
            "Uploading files... 100% (Batch 2/2)",
            "Upload complete!",
        ]
        assert notifier.get(UPLOAD_KEY).level is NotificationLevel.SUCCESS

    def test_failed_batch_stops_the_run(
        self,
        service: UploadService,
        mock_client: MagicMock,
        notifier: NotificationQueue,
        sleep: MagicMock,
        make_files,
    ):
        mock_client.upload_files.side_effect = _fail_on_call(2, ApiError(500, "Internal error"))

        summary = service.run(make_files(6))

        assert summary.state is UploadState.FAILED
        assert not summary.success
        assert summary.stats.completed_batches == 1
        assert summary.stats.total_batches == 2
        assert summary.stats.succeeded == 5
        assert summary.stats.failed == 1
        assert summary.progress.upload == 50
        sleep.assert_not_called()
        note = notifier.get(UPLOAD_KEY)
        assert note.level is NotificationLevel.ERROR
        assert note.message == "Failed to upload batch 2: Internal error"
        assert notifier.get(PROCESSING_KEY) is None

    def test_no_batch_after_failure(self, mock_client: MagicMock, notifier, sleep, make_files):
        service = UploadService(mock_client, notifier, batch_size=2, sleep=sleep)
        mock_client.upload_files.side_effect = _fail_on_call(2, httpx.ConnectError("refused"))

        summary = service.run(make_files(8))

        assert mock_client.upload_files.call_count == 2
        assert summary.stats.succeeded == 2
        assert summary.errors == ["Failed to upload batch 2: refused"]

    def test_state_machine_on_success(self, service: UploadService, make_files):
        service.run(make_files(1))

        assert service.state_history == [
            UploadState.IDLE,
            UploadState.UPLOADING,
            UploadState.UPLOAD_COMPLETE,
            UploadState.PROCESSING,
            UploadState.COMPLETE,
            UploadState.IDLE,
        ]

    def test_state_machine_on_failure(self, service: UploadService, mock_client, make_files):
        mock_client.upload_files.side_effect = _fail_on_call(1, ApiError(502))

        service.run(make_files(1))

        assert service.state_history == [
            UploadState.IDLE,
            UploadState.UPLOADING,
            UploadState.FAILED,
            UploadState.IDLE,
        ]
        assert service.pending == []

    def test_can_upload_again_after_failure(self, service: UploadService, mock_client, make_files):
        mock_client.upload_files.side_effect = _fail_on_call(1, ApiError(500))
        service.run(make_files(2), wait_for_processing=False)

        mock_client.upload_files.side_effect = lambda parts: {"results": [{} for _ in parts]}
        summary = service.run(make_files(2), wait_for_processing=False)

        assert summary.success

    def test_processing_skipped_when_nothing_accepted(
        self, service: UploadService, mock_client, sleep, notifier, make_files
    ):
        mock_client.upload_files.side_effect = lambda parts: {"results": []}

        summary = service.run(make_files(2))

        assert summary.state is UploadState.COMPLETE
        assert UploadState.PROCESSING not in service.state_history
        sleep.assert_not_called()
        assert notifier.get(PROCESSING_KEY) is None

    def test_processing_messages(self, mock_client, notifier, sleep, make_files):
        service = UploadService(mock_client, notifier, seconds_per_file=2, sleep=sleep)

        service.run(make_files(2))

        assert notifier.messages(PROCESSING_KEY) == [
            "Processing files...",
            "Processing files... 25% (1s/4s)",
            "Processing files... 50% (2s/4s)",
            "Processing files... 75% (3s/4s)",
            "Processing files... 100% (4s/4s)",
            "Processing complete!",
        ]
        sleep.assert_called_with(1)

    def test_on_complete_called_after_processing(self, service: UploadService, make_files):
        done = MagicMock()

        service.run(make_files(1), on_complete=done)

        done.assert_called_once_with(service.stats)

    def test_on_complete_not_called_without_waiting(self, service: UploadService, make_files):
        done = MagicMock()

        summary = service.run(make_files(1), wait_for_processing=False, on_complete=done)

        assert summary.state is UploadState.UPLOAD_COMPLETE
        done.assert_not_called()

    def test_nothing_to_upload(self, service: UploadService, notifier, mock_client):
        service.select([SelectedFile("resume.docx", 1)])

        summary = service.upload()

        assert summary.state is UploadState.IDLE
        assert not summary.success
        mock_client.upload_files.assert_not_called()
        assert notifier.get(UPLOAD_KEY).message == "Please select valid files to upload."

    def test_malformed_response_fails_batch(self, service: UploadService, mock_client, make_files):
        mock_client.upload_files.side_effect = lambda parts: ["not", "an", "object"]

        summary = service.run(make_files(1))

        assert summary.state is UploadState.FAILED
        assert summary.errors[0].startswith("Failed to upload batch 1:")

    def test_response_without_results_fails_batch(
        self, service: UploadService, mock_client, sleep, make_files
    ):
        mock_client.upload_files.side_effect = lambda parts: {"message": "ok"}

        summary = service.run(make_files(3))

        assert summary.state is UploadState.FAILED
        assert summary.errors[0].startswith("Failed to upload batch 1:")
        assert summary.stats.succeeded == 0
        assert summary.stats.failed == 3
        sleep.assert_not_called()

    def test_unexpected_error_resets_to_idle(
        self, service: UploadService, mock_client, notifier, make_files
    ):
        mock_client.upload_files.side_effect = RuntimeError("boom")

        summary = service.run(make_files(1))

        assert summary.state is UploadState.FAILED
        assert service.state is UploadState.IDLE
        assert notifier.get(UPLOAD_KEY).message == "Upload failed!"
        assert summary.errors == ["Upload failed: boom"]

    def test_rejects_concurrent_upload(self, service: UploadService, make_files):
        service.select(make_files(1))
        service.state = UploadState.UPLOADING

        with pytest.raises(OperationError):
            service.upload()

    def test_rejected_selection_returns_none(self, service: UploadService, mock_client, make_files):
        assert service.run(make_files(51)) is None
        mock_client.upload_files.assert_not_called()

    def test_files_are_closed_after_batch(self, service: UploadService, mock_client, temp_dir):
        path = temp_dir / "cv.pdf"
        path.write_bytes(b"%PDF")
        streams = []

        def _upload(parts):
            streams.extend(fh for _, fh, _ in parts)
            return {"results": [{}]}

        mock_client.upload_files.side_effect = _upload

        service.run([SelectedFile.from_path(path)], wait_for_processing=False)

        assert streams and all(fh.closed for fh in streams)


def test_invalid_batch_size(mock_client):
    with pytest.raises(ValueError):
        UploadService(mock_client, batch_size=0)
