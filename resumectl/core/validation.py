"""Input validation helpers for resumectl."""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from resumectl.core.exceptions import InvalidURLError, PathValidationError, ValidationError

SUPPORTED_SCHEMES = ("http", "https")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_server_url(url: str) -> str:
    """Validate and normalize a server URL.

    Args:
        url: URL to validate.

    Returns:
        URL with surrounding whitespace and trailing slashes removed.

    Raises:
        InvalidURLError: If the URL is empty, has no scheme/hostname, or
            uses an unsupported scheme.
    """
    if not url or not isinstance(url, str):
        raise InvalidURLError(str(url), "URL is required")

    url = url.strip().rstrip("/")
    parsed = urlparse(url)

    if not parsed.scheme:
        raise InvalidURLError(url, "URL must include scheme (http:// or https://)")
    if parsed.scheme not in SUPPORTED_SCHEMES:
        raise InvalidURLError(url, f"Unsupported scheme: {parsed.scheme}")
    if not parsed.netloc:
        raise InvalidURLError(url, "URL must include hostname")

    return url


def validate_path_exists(path: str | Path, *, must_be_dir: bool = False) -> Path:
    """Validate that a path exists.

    Raises:
        PathValidationError: If the path is missing or of the wrong kind.
    """
    p = Path(path).expanduser()
    if not p.exists():
        raise PathValidationError(str(path), "does not exist")
    if must_be_dir and not p.is_dir():
        raise PathValidationError(str(path), "not a directory")
    return p


def validate_positive_int(value: Optional[int], field: str, default: int) -> int:
    """Validate a positive integer setting, falling back to a default."""
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer", field=field, value=value)
    if number < 1:
        raise ValidationError(f"{field} must be at least 1", field=field, value=value)
    return number


def validate_required_text(value: Optional[str], field: str) -> str:
    """Validate a required free-text field.

    Raises:
        ValidationError: If the value is missing or blank.
    """
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field} is required", field=field)
    return text


def validate_requirements(requirements: Sequence[str]) -> list[str]:
    """Validate job requirements: at least one, none blank.

    Raises:
        ValidationError: If the list is empty or holds a blank entry.
    """
    if not requirements:
        raise ValidationError("At least one requirement is needed", field="requirements")
    cleaned = [r.strip() for r in requirements]
    if not all(cleaned):
        raise ValidationError("Requirement cannot be empty", field="requirements")
    return cleaned


def validate_email(email: str) -> str:
    """Validate an email address.

    Raises:
        ValidationError: If the address is malformed.
    """
    email = email.strip()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError(f"Invalid email address: {email}", field="email", value=email)
    return email
