"""photoctl - A CLI for batch uploads to a photo-tagging store.

This package provides a command-line interface for sending local images to
a photo store, supporting:
- Concurrent batch uploads with per-item progress
- Selective retry of failed items
- Gallery listing and tag search
"""

__version__ = "0.1.0"

from photoctl.core.client import StoreClient
from photoctl.core.config import Config, Profile
from photoctl.core.exceptions import (
    ConfigurationError,
    PhotoCtlError,
    ProtocolError,
    ReadError,
    TransportError,
    ValidationError,
)
from photoctl.services.uploads import UploadService

__all__ = [
    "__version__",
    "StoreClient",
    "Config",
    "Profile",
    "UploadService",
    "PhotoCtlError",
    "ConfigurationError",
    "ValidationError",
    "ReadError",
    "TransportError",
    "ProtocolError",
]
