"""Core utilities and shared components for s3-tidy."""

from .config import settings
from .exceptions import (
    DeletionError,
    ListingError,
    S3TidyError,
    StorageConnectionError,
)
from .observability import get_logger, get_tracer

__all__ = [
    "settings",
    "S3TidyError",
    "StorageConnectionError",
    "ListingError",
    "DeletionError",
    "get_logger",
    "get_tracer",
]
