"""Upload command for resumectl."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import click

from resumectl.cli.common import Context, ExitCode, global_options, handle_errors, require_auth
from resumectl.core.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_FILES,
    DEFAULT_SECONDS_PER_FILE,
)
from resumectl.core.exceptions import ResumeCtlError
from resumectl.core.notifier import ConsoleNotifier, NotificationQueue, Notifier
from resumectl.core.output import print_error, print_output, print_warning
from resumectl.core.validation import validate_positive_int
from resumectl.models.upload import UploadStats
from resumectl.services.resumes import ResumeService
from resumectl.services.uploads import UploadService
from resumectl.uploaders.common import collect_files

logger = logging.getLogger(__name__)

PROFILE_LIMITS = {
    "batch_size": DEFAULT_BATCH_SIZE,
    "max_files": DEFAULT_MAX_FILES,
    "max_file_size": DEFAULT_MAX_FILE_SIZE,
    "seconds_per_file": DEFAULT_SECONDS_PER_FILE,
}

SUMMARY_LABELS = {
    "total": "Total Selected",
    "valid": "Valid",
    "invalid": "Invalid",
    "succeeded": "Accepted",
    "failed": "Failed",
    "total_batches": "Batches",
    "completed_batches": "Batches Done",
    "upload_progress": "Upload %",
    "processing_progress": "Processing %",
    "total_resumes": "Stored Résumés",
}


@click.command("upload")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.option("--batch-size", type=int, default=None, help="Files per request (profile default: 5)")
@click.option(
    "--wait/--no-wait",
    default=True,
    help="Follow the estimated processing time after upload",
)
@global_options
@require_auth
@handle_errors
def upload(ctx: Context, paths: tuple[Path, ...], batch_size: Optional[int], wait: bool) -> None:
    """Upload PDF/TXT résumés in batches.

    Directories are searched recursively for .pdf and .txt files; files given
    directly are always validated and reported.

    Example:
        resumectl upload ./resumes
        resumectl upload cv1.pdf cv2.txt --batch-size 2 --no-wait
    """
    profile = ctx.get_profile()
    client = ctx.get_client()
    limits = {
        name: validate_positive_int(getattr(profile, name), name, default)
        for name, default in PROFILE_LIMITS.items()
    }
    limits["batch_size"] = validate_positive_int(batch_size, "batch_size", limits["batch_size"])

    files = collect_files(paths)
    if not files:
        print_error("No PDF or TXT files found")
        raise SystemExit(ExitCode.GENERAL_ERROR)

    notifier: Notifier = NotificationQueue() if ctx.quiet else ConsoleNotifier()
    service = UploadService(client, notifier, **limits)
    refreshed: dict[str, Any] = {}

    def refresh(stats: UploadStats) -> None:
        try:
            refreshed["total_resumes"] = ResumeService(client).total()
        except ResumeCtlError as e:
            logger.warning("Could not refresh résumé total: %s", e)
            print_warning(f"Could not refresh résumé total: {e.message}")

    try:
        summary = service.run(files, wait_for_processing=wait, on_complete=refresh)
    finally:
        notifier.close()

    if summary is None:
        raise SystemExit(ExitCode.GENERAL_ERROR)

    if not ctx.quiet:
        output = {**summary.to_dict(), **refreshed}
        print_output(
            output,
            format=ctx.output_format,
            column_labels=SUMMARY_LABELS,
            title="Upload Summary",
        )

    if not summary.success:
        raise SystemExit(ExitCode.GENERAL_ERROR)
