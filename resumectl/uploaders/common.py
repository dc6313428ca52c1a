"""Selection, validation and batching for résumé uploads."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from resumectl.core.exceptions import (
    FileTooLargeError,
    TooManyFilesError,
    UnsupportedFileTypeError,
    ValidationError,
)
from resumectl.core.validation import validate_path_exists
from resumectl.models.upload import SelectedFile, SelectionResult, UploadBatch, ValidationResult
from resumectl.uploaders.constants import (
    ALLOWED_EXTENSIONS,
    CONTENT_TYPES,
    DEFAULT_CONTENT_TYPE,
    MAX_FILE_SIZE,
    MAX_FILES,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Selection
# =============================================================================


def _is_usable(path: Path) -> bool:
    if path.name.startswith("."):
        return False
    if path.is_symlink():
        try:
            return path.resolve().exists()
        except (OSError, ValueError):
            return False
    return True


def collect_files(
    paths: Iterable[str | Path],
    *,
    allowed_extensions: Sequence[str] = ALLOWED_EXTENSIONS,
) -> list[SelectedFile]:
    """Collect files from explicit paths and directories.

    Explicit files are taken as given so that validation can report on them.
    Directories are searched recursively for files with an allowed
    extension, skipping hidden files and broken symlinks.

    Args:
        paths: Files and/or directories.
        allowed_extensions: Extensions kept when expanding directories.

    Returns:
        Selected files, in argument order, directory contents sorted.

    Raises:
        PathValidationError: If a path does not exist.
    """
    allowed = {ext.lower() for ext in allowed_extensions}
    selected: list[SelectedFile] = []

    for raw in paths:
        path = validate_path_exists(raw)

        if path.is_file():
            selected.append(SelectedFile.from_path(path))
            continue

        found = sorted(
            p
            for p in path.rglob("*")
            if p.is_file() and _is_usable(p) and p.suffix.lower() in allowed
        )
        logger.debug("Found %d candidate files under %s", len(found), path)
        selected.extend(SelectedFile.from_path(p) for p in found)

    return selected


# =============================================================================
# Validation
# =============================================================================


def _describe_types(allowed_extensions: Sequence[str]) -> str:
    return " or ".join(ext.lstrip(".").upper() for ext in allowed_extensions)


def _describe_size(max_file_size: int) -> str:
    return f"{max_file_size / (1024 * 1024):g}MB"


def check_file(
    file: SelectedFile,
    *,
    allowed_extensions: Sequence[str] = ALLOWED_EXTENSIONS,
    max_file_size: int = MAX_FILE_SIZE,
) -> None:
    """Raise if a file may not be uploaded.

    The type check comes first, so a wrong-type file is reported as such
    whatever its size.

    Raises:
        UnsupportedFileTypeError: Extension not in the allow-list.
        FileTooLargeError: File larger than ``max_file_size``.
    """
    if file.extension not in {ext.lower() for ext in allowed_extensions}:
        raise UnsupportedFileTypeError(
            file.name,
            f"{file.name}: File type not supported. "
            f"Please upload only {_describe_types(allowed_extensions)} files.",
        )
    if file.size > max_file_size:
        raise FileTooLargeError(
            file.name,
            f"{file.name}: File size exceeds {_describe_size(max_file_size)} limit.",
        )


def validate_file(
    file: SelectedFile,
    *,
    allowed_extensions: Sequence[str] = ALLOWED_EXTENSIONS,
    max_file_size: int = MAX_FILE_SIZE,
) -> ValidationResult:
    """Validate one file, returning the outcome instead of raising."""
    try:
        check_file(file, allowed_extensions=allowed_extensions, max_file_size=max_file_size)
    except ValidationError as e:
        return ValidationResult(file=file, is_valid=False, error=e.message)
    return ValidationResult(file=file, is_valid=True)


def check_selection_size(files: Sequence[SelectedFile], max_files: int = MAX_FILES) -> None:
    """Reject a selection holding more than ``max_files`` files.

    Raises:
        TooManyFilesError: If the selection is too large.
    """
    if len(files) > max_files:
        raise TooManyFilesError(len(files), max_files)


def validate_selection(
    files: Sequence[SelectedFile],
    *,
    max_files: int = MAX_FILES,
    allowed_extensions: Sequence[str] = ALLOWED_EXTENSIONS,
    max_file_size: int = MAX_FILE_SIZE,
) -> SelectionResult:
    """Validate a whole selection.

    The selection is rejected outright when it is too large. Otherwise every
    file is checked independently; valid files keep their original order.

    Raises:
        TooManyFilesError: If the selection is too large.
    """
    check_selection_size(files, max_files)

    results = [
        validate_file(f, allowed_extensions=allowed_extensions, max_file_size=max_file_size)
        for f in files
    ]
    return SelectionResult(
        total=len(files),
        valid=[r.file for r in results if r.is_valid],
        invalid=[r for r in results if not r.is_valid],
    )


# =============================================================================
# Batching
# =============================================================================


def split_into_batches(
    files: Sequence[SelectedFile],
    batch_size: int,
) -> list[UploadBatch]:
    """Split files into consecutive batches of at most ``batch_size``.

    Order is preserved and nothing is dropped or deduplicated; only the last
    batch may be smaller.

    Raises:
        ValueError: If ``batch_size`` is not positive.
    """
    if batch_size <= 0:
        raise ValueError(f"Batch size must be positive: {batch_size}")

    return [
        UploadBatch(index=number, files=list(files[start : start + batch_size]))
        for number, start in enumerate(range(0, len(files), batch_size), start=1)
    ]


def content_type_for(file: SelectedFile) -> str:
    """Content type sent with a file's multipart part."""
    return CONTENT_TYPES.get(file.extension, DEFAULT_CONTENT_TYPE)
