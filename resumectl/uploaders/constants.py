"""Shared constants for upload selection, validation and batching.

Profiles can override the numeric limits; the allow-list is fixed by what
the backend can parse.
"""

from resumectl.core.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_FILES,
    DEFAULT_SECONDS_PER_FILE,
)

# Extensions the backend parses (lowercase, with dot)
ALLOWED_EXTENSIONS = (".pdf", ".txt")

# Content types sent for each allowed extension
CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".txt": "text/plain",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Files per upload request
BATCH_SIZE = DEFAULT_BATCH_SIZE

# Largest selection accepted in one go
MAX_FILES = DEFAULT_MAX_FILES

# Per-file size limit in bytes (5 MiB)
MAX_FILE_SIZE = DEFAULT_MAX_FILE_SIZE

# Estimated backend processing time per accepted file
SECONDS_PER_FILE = DEFAULT_SECONDS_PER_FILE

# Interval between processing-progress updates
PROCESSING_TICK_SECONDS = 1
