"""Service layer for photoctl.

Provides service classes that encapsulate store operations.
"""

from __future__ import annotations

from .base import BaseService
from .photos import PhotoService
from .uploads import UploadService

__all__ = [
    "BaseService",
    "PhotoService",
    "UploadService",
]
