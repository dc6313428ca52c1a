"""Upload building blocks for resumectl.

Selection, validation and batching helpers. The orchestration lives in
`UploadService` from `resumectl.services.uploads`.
"""

from resumectl.uploaders.common import (
    check_file,
    check_selection_size,
    collect_files,
    content_type_for,
    split_into_batches,
    validate_file,
    validate_selection,
)
from resumectl.uploaders.constants import (
    ALLOWED_EXTENSIONS,
    BATCH_SIZE,
    MAX_FILE_SIZE,
    MAX_FILES,
    SECONDS_PER_FILE,
)

__all__ = [
    # Constants
    "ALLOWED_EXTENSIONS",
    "BATCH_SIZE",
    "MAX_FILES",
    "MAX_FILE_SIZE",
    "SECONDS_PER_FILE",
    # Selection and validation
    "collect_files",
    "check_file",
    "check_selection_size",
    "validate_file",
    "validate_selection",
    # Batching
    "split_into_batches",
    "content_type_for",
]
