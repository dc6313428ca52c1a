"""resumectl - A CLI for bulk résumé upload to a recruiting backend.

This package provides a command-line interface and library for:
- Validating and uploading résumé files in sequential batches
- Reporting upload and estimated processing progress
- Listing, searching, archiving and deleting stored résumés
- Managing job descriptions, ranked candidates and candidate profiles
"""

__version__ = "0.1.0"

from resumectl.core.client import ResumeClient
from resumectl.core.config import Config, Profile
from resumectl.core.exceptions import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    NetworkError,
    ResumeCtlError,
    UploadError,
    ValidationError,
)
from resumectl.services.uploads import UploadService

__all__ = [
    "__version__",
    "ResumeClient",
    "UploadService",
    "Config",
    "Profile",
    "ResumeCtlError",
    "ApiError",
    "AuthenticationError",
    "ConfigurationError",
    "NetworkError",
    "UploadError",
    "ValidationError",
]
