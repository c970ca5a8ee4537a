"""Core modules for photoctl."""

from photoctl.core.client import StoreClient
from photoctl.core.config import CONFIG_DIR, CONFIG_FILE, Config, Profile
from photoctl.core.exceptions import (
    ConfigurationError,
    ConnectionError,
    EncodeCancelledError,
    NetworkError,
    OperationError,
    PhotoCtlError,
    ProfileNotFoundError,
    ProtocolError,
    ReadError,
    ResourceNotFoundError,
    RetryExhaustedError,
    StateTransitionError,
    TransportError,
    UploadError,
    ValidationError,
)
from photoctl.core.logging import LogContext, get_logger, setup_logging
from photoctl.core.output import (
    OutputFormat,
    console,
    print_error,
    print_json,
    print_output,
    print_success,
    print_table,
    print_warning,
)
from photoctl.core.validation import (
    validate_server_url,
    validate_timeout,
    validate_upload_path,
    validate_workers,
)

__all__ = [
    # Exceptions
    "PhotoCtlError",
    "ConfigurationError",
    "ProfileNotFoundError",
    "ConnectionError",
    "NetworkError",
    "ResourceNotFoundError",
    "RetryExhaustedError",
    "ValidationError",
    "OperationError",
    "UploadError",
    "ReadError",
    "EncodeCancelledError",
    "TransportError",
    "ProtocolError",
    "StateTransitionError",
    # Validation
    "validate_server_url",
    "validate_timeout",
    "validate_upload_path",
    "validate_workers",
    # Config
    "Config",
    "Profile",
    "CONFIG_DIR",
    "CONFIG_FILE",
    # Client
    "StoreClient",
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
    "LogContext",
]
