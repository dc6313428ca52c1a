"""Core modules for resumectl."""

from resumectl.core.client import ResumeClient
from resumectl.core.config import CONFIG_DIR, CONFIG_FILE, Config, Profile
from resumectl.core.exceptions import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    ConnectionError,
    NetworkError,
    OperationError,
    PermissionDeniedError,
    ResourceNotFoundError,
    ResumeCtlError,
    RetryExhaustedError,
    TooManyFilesError,
    UploadError,
    ValidationError,
)
from resumectl.core.logging import LogContext, get_logger, log_context, setup_logging
from resumectl.core.notifier import (
    ConsoleNotifier,
    Notification,
    NotificationLevel,
    NotificationQueue,
    Notifier,
)
from resumectl.core.output import (
    OutputFormat,
    console,
    print_error,
    print_json,
    print_output,
    print_success,
    print_table,
    print_warning,
)
from resumectl.core.validation import validate_path_exists, validate_server_url

__all__ = [
    # Exceptions
    "ResumeCtlError",
    "ApiError",
    "AuthenticationError",
    "ConfigurationError",
    "ConnectionError",
    "NetworkError",
    "OperationError",
    "PermissionDeniedError",
    "ResourceNotFoundError",
    "RetryExhaustedError",
    "TooManyFilesError",
    "UploadError",
    "ValidationError",
    # Validation
    "validate_server_url",
    "validate_path_exists",
    # Config
    "Config",
    "Profile",
    "CONFIG_DIR",
    "CONFIG_FILE",
    # Client
    "ResumeClient",
    # Notifications
    "Notification",
    "NotificationLevel",
    "Notifier",
    "NotificationQueue",
    "ConsoleNotifier",
    # Output
    "OutputFormat",
    "print_output",
    "print_table",
    "print_json",
    "print_error",
    "print_warning",
    "print_success",
    "console",
    # Logging
    "get_logger",
    "setup_logging",
    "log_context",
    "LogContext",
]
