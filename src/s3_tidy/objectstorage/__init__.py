"""Object storage operations for S3-compatible services."""

from .analysis import ScanResult, StaleObjectScanner, compute_cutoff, run_scan
from .clients import S3ClientConfig, S3ClientManager
from .store import ObjectRecord, ObjectStore, S3ObjectStore

__all__ = [
    "ObjectRecord",
    "ObjectStore",
    "S3ClientConfig",
    "S3ClientManager",
    "S3ObjectStore",
    "ScanResult",
    "StaleObjectScanner",
    "compute_cutoff",
    "run_scan",
]
