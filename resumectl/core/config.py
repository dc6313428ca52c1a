"""Configuration management for resumectl.

Supports YAML profiles and environment variable overrides.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from resumectl.core.exceptions import ConfigurationError, ProfileNotFoundError

# =============================================================================
# Constants
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "resumectl"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

# Environment variable names
ENV_URL = "RESUMECTL_URL"
ENV_TOKEN = "RESUMECTL_TOKEN"
ENV_PROFILE = "RESUMECTL_PROFILE"
ENV_VERIFY_SSL = "RESUMECTL_VERIFY_SSL"
ENV_TIMEOUT = "RESUMECTL_TIMEOUT"

DEFAULT_TIMEOUT = 600
DEFAULT_BATCH_SIZE = 5
DEFAULT_MAX_FILES = 50
DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024
DEFAULT_SECONDS_PER_FILE = 12


# =============================================================================
# Profile
# =============================================================================


@dataclass
class Profile:
    """Configuration profile for a recruiting backend."""

    url: str
    verify_ssl: bool = True
    timeout: int = DEFAULT_TIMEOUT
    token: Optional[str] = None
    batch_size: int = DEFAULT_BATCH_SIZE
    max_files: int = DEFAULT_MAX_FILES
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    seconds_per_file: int = DEFAULT_SECONDS_PER_FILE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization (token excluded)."""
        return {
            "url": self.url,
            "verify_ssl": self.verify_ssl,
            "timeout": self.timeout,
            "batch_size": self.batch_size,
            "max_files": self.max_files,
            "max_file_size": self.max_file_size,
            "seconds_per_file": self.seconds_per_file,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create from dictionary."""
        return cls(
            url=data.get("url", ""),
            verify_ssl=data.get("verify_ssl", True),
            timeout=data.get("timeout", DEFAULT_TIMEOUT),
            token=data.get("token"),
            batch_size=data.get("batch_size", DEFAULT_BATCH_SIZE),
            max_files=data.get("max_files", DEFAULT_MAX_FILES),
            max_file_size=data.get("max_file_size", DEFAULT_MAX_FILE_SIZE),
            seconds_per_file=data.get("seconds_per_file", DEFAULT_SECONDS_PER_FILE),
        )


# =============================================================================
# Config
# =============================================================================


@dataclass
class Config:
    """Application configuration."""

    default_profile: str = "default"
    output_format: str = "table"
    profiles: dict[str, Profile] = field(default_factory=dict)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load config from file with environment variable overrides.

        Priority (highest to lowest):
        1. Environment variables
        2. Config file
        3. Defaults

        Args:
            config_path: Optional path to config file.

        Returns:
            Loaded configuration.
        """
        path = config_path or CONFIG_FILE
        config = cls()

        if path.exists():
            try:
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

                config.default_profile = data.get("default_profile", "default")
                config.output_format = data.get("output_format", "table")

                for name, pdata in (data.get("profiles") or {}).items():
                    config.profiles[name] = Profile.from_dict(pdata or {})
            except Exception as e:
                raise ConfigurationError(f"Failed to load config: {e}")

        if url := os.getenv(ENV_URL):
            verify_ssl = os.getenv(ENV_VERIFY_SSL, "true").lower() in ("true", "1", "yes")
            try:
                timeout = int(os.getenv(ENV_TIMEOUT, str(DEFAULT_TIMEOUT)))
            except ValueError:
                raise ConfigurationError(
                    "Timeout must be an integer", field=ENV_TIMEOUT, value=os.getenv(ENV_TIMEOUT)
                )

            base = config.profiles.get("default")
            config.profiles["default"] = Profile(
                url=url,
                verify_ssl=verify_ssl,
                timeout=timeout,
                token=base.token if base else None,
                batch_size=base.batch_size if base else DEFAULT_BATCH_SIZE,
                max_files=base.max_files if base else DEFAULT_MAX_FILES,
                max_file_size=base.max_file_size if base else DEFAULT_MAX_FILE_SIZE,
                seconds_per_file=base.seconds_per_file if base else DEFAULT_SECONDS_PER_FILE,
            )

        if profile := os.getenv(ENV_PROFILE):
            config.default_profile = profile

        return config

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save config to file (excludes tokens).

        Args:
            config_path: Optional path to config file.
        """
        path = config_path or CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "default_profile": self.default_profile,
            "output_format": self.output_format,
            "profiles": {name: p.to_dict() for name, p in self.profiles.items()},
        }

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def get_profile(self, name: Optional[str] = None) -> Profile:
        """Get profile by name or default.

        Raises:
            ProfileNotFoundError: If profile doesn't exist.
        """
        name = name or self.default_profile
        if name not in self.profiles:
            raise ProfileNotFoundError(name)
        return self.profiles[name]

    def has_profile(self, name: str) -> bool:
        """Check if profile exists."""
        return name in self.profiles

    def add_profile(
        self,
        name: str,
        url: str,
        verify_ssl: bool = True,
        timeout: int = DEFAULT_TIMEOUT,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> Profile:
        """Add or update a profile.

        Args:
            name: Profile name.
            url: Backend API base URL.
            verify_ssl: Whether to verify SSL certificates.
            timeout: Request timeout in seconds.
            batch_size: Files per upload request.

        Returns:
            Created profile.
        """
        profile = Profile(
            url=url,
            verify_ssl=verify_ssl,
            timeout=timeout,
            batch_size=batch_size,
        )
        self.profiles[name] = profile
        return profile

    def remove_profile(self, name: str) -> bool:
        """Remove a profile.

        Returns:
            True if removed, False if didn't exist.
        """
        if name in self.profiles:
            del self.profiles[name]
            return True
        return False

    def set_default_profile(self, name: str) -> None:
        """Set the default profile.

        Raises:
            ProfileNotFoundError: If profile doesn't exist.
        """
        if name not in self.profiles:
            raise ProfileNotFoundError(name)
        self.default_profile = name


def get_token(profile: Optional[Profile] = None) -> Optional[str]:
    """Get the API token, preferring the environment over the profile.

    The token itself is issued by the backend's auth flow; resumectl only
    reads it.
    """
    token = os.getenv(ENV_TOKEN)
    if token:
        return token
    return profile.token if profile else None
