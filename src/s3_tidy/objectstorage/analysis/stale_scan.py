"""Stale object scan: classify objects by age, then report or delete them."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import typer

from s3_tidy import reporting
from s3_tidy.core import get_logger, get_tracer
from s3_tidy.core.exceptions import DeletionError
from s3_tidy.objectstorage.clients import S3ClientConfig
from s3_tidy.objectstorage.store import ObjectStore, S3ObjectStore
from s3_tidy.schemas import ScanConfig

logger = get_logger(__name__)
tracer = get_tracer(__name__)

Echo = Callable[..., None]


@dataclass(frozen=True)
class ScanResult:
    """Totals of a completed scan.

    Attributes:
        bucket: Bucket that was scanned
        cutoff: Objects modified before this time were stale
        stale_count: Number of stale objects found
        total_bytes: Summed size of stale objects that reported a size
        deleted_count: Number of stale objects actually deleted
    """

    bucket: str
    cutoff: datetime
    stale_count: int
    total_bytes: int
    deleted_count: int

    @property
    def size_gb(self) -> float:
        return reporting.bytes_to_gb(self.total_bytes)

    @property
    def estimated_savings(self) -> float:
        return reporting.estimate_monthly_savings(self.total_bytes)


def compute_cutoff(days: int, now: Optional[datetime] = None) -> datetime:
    """Return the instant ``days`` before ``now`` (UTC by default)."""
    if now is None:
        now = datetime.now(timezone.utc)
    try:
        return now - timedelta(days=days)
    except OverflowError:
        # Earlier than any representable time: nothing is stale
        return datetime.min.replace(tzinfo=timezone.utc)


class StaleObjectScanner:
    """Runs the scan-and-report loop against an ObjectStore."""

    def __init__(self, store: ObjectStore, echo: Echo = typer.echo):
        """Initialize the scanner.

        Args:
            store: Storage backend supplying listings and deletions
            echo: Output function for report lines; called with ``err=True``
                for warnings
        """
        self.store = store
        self.echo = echo

    def scan(self, config: ScanConfig, now: Optional[datetime] = None) -> ScanResult:
        """Scan the configured bucket and emit the report.

        Args:
            config: Scan configuration
            now: Reference time for the cutoff, defaults to the current time

        Returns:
            ScanResult with the accumulated totals

        Raises:
            ListingError: If a listing page cannot be retrieved. No summary
                is emitted in that case.
        """
        cutoff = compute_cutoff(config.days, now)
        self.echo(reporting.scan_header(config.bucket, cutoff, config.days))
        logger.info(
            "Starting stale object scan",
            bucket=config.bucket,
            days=config.days,
            cutoff=cutoff.isoformat(),
            mode=config.mode,
        )

        with tracer.start_as_current_span("stale_scan") as span:
            span.set_attribute("s3.bucket", config.bucket)
            span.set_attribute("scan.days", config.days)
            span.set_attribute("scan.mode", config.mode)

            stale_count = 0
            total_bytes = 0
            deleted_count = 0

            for record in self.store.iter_objects(config.bucket):
                if record.last_modified >= cutoff:
                    continue

                stale_count += 1
                if record.size is not None:
                    total_bytes += record.size

                if config.report_only:
                    continue

                if config.dry_run:
                    self.echo(
                        reporting.dry_run_line(
                            record.key, record.last_modified, record.size
                        )
                    )
                    continue

                try:
                    self.store.delete_object(config.bucket, record.key)
                except DeletionError as e:
                    logger.info(
                        "Failed to delete object",
                        bucket=config.bucket,
                        key=e.key,
                        reason=e.reason,
                    )
                    self.echo(reporting.delete_failed_line(e.key, e.reason), err=True)
                    continue

                deleted_count += 1
                logger.info("Object deleted", bucket=config.bucket, key=record.key)
                self.echo(reporting.deleted_line(record.key))

            result = ScanResult(
                bucket=config.bucket,
                cutoff=cutoff,
                stale_count=stale_count,
                total_bytes=total_bytes,
                deleted_count=deleted_count,
            )
            span.set_attribute("scan.stale_count", result.stale_count)
            span.set_attribute("scan.total_bytes", result.total_bytes)
            span.set_attribute("scan.deleted_count", result.deleted_count)

        logger.info(
            "Stale object scan completed",
            bucket=config.bucket,
            stale_count=result.stale_count,
            total_bytes=result.total_bytes,
            deleted_count=result.deleted_count,
        )
        self._emit_summary(config, result)
        return result

    def _emit_summary(self, config: ScanConfig, result: ScanResult) -> None:
        self.echo(reporting.SEPARATOR)

        if config.report_only:
            lines = reporting.cost_report_lines(result.stale_count, result.total_bytes)
        elif config.dry_run:
            lines = reporting.dry_run_summary_lines(
                result.stale_count, result.total_bytes
            )
        else:
            lines = reporting.cleanup_summary_lines(result.deleted_count)

        for line in lines:
            self.echo(line)


def run_scan(
    bucket: str,
    days: int = 30,
    dry_run: bool = True,
    report_only: bool = False,
    region_name: Optional[str] = None,
    endpoint_url: Optional[str] = None,
    aws_profile: Optional[str] = None,
    echo: Echo = typer.echo,
) -> ScanResult:
    """Convenience function to scan an S3 bucket for stale objects.

    Args:
        bucket: Target bucket name
        days: Age threshold in days
        dry_run: Simulate deletion without taking action
        report_only: Only produce the cost report; never delete
        region_name: AWS region name
        endpoint_url: Custom S3 endpoint URL
        aws_profile: AWS CLI profile name
        echo: Output function for report lines

    Returns:
        ScanResult with the accumulated totals

    Raises:
        pydantic.ValidationError: If the scan parameters are invalid
        StorageConnectionError: If the S3 client cannot be created
        ListingError: If a listing page cannot be retrieved
    """
    config = ScanConfig(
        bucket=bucket, days=days, dry_run=dry_run, report_only=report_only
    )
    store = S3ObjectStore.from_config(
        S3ClientConfig(
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )
    )

    scanner = StaleObjectScanner(store, echo=echo)
    return scanner.scan(config)
