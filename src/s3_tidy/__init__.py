"""Cloud governance tool for S3 cleanup.

s3-tidy finds objects in an S3 (or S3-compatible) bucket that have not been
modified within an age threshold, and either reports the storage they use
and what it costs, simulates their deletion, or deletes them.

Key Features:
    - Age-based stale object detection over paginated bucket listings
    - Dry-run mode (the default) that only prints intended deletions
    - Cost-savings report based on S3 Standard pricing
    - CLI interface

Recommended Usage:
    >>> from s3_tidy import run_scan
    >>> result = run_scan("my-bucket", days=90, report_only=True)
    >>> result.estimated_savings

Advanced Usage:
    Run the scan against any backend implementing ObjectStore:

    >>> from s3_tidy import ScanConfig, StaleObjectScanner
    >>> scanner = StaleObjectScanner(my_store, echo=print)
    >>> scanner.scan(ScanConfig(bucket="my-bucket", days=7))
"""

__version__ = "0.1.0"

from .objectstorage import (
    ObjectRecord,
    ObjectStore,
    S3ClientConfig,
    S3ObjectStore,
    ScanResult,
    StaleObjectScanner,
    run_scan,
)
from .reporting import PRICE_PER_GB
from .schemas import ScanConfig

__all__ = [
    "PRICE_PER_GB",
    "ObjectRecord",
    "ObjectStore",
    "S3ClientConfig",
    "S3ObjectStore",
    "ScanConfig",
    "ScanResult",
    "StaleObjectScanner",
    "run_scan",
]
