"""Report lines and cost arithmetic for stale-object scans."""

from datetime import datetime, timezone
from typing import Optional

# S3 Standard storage, USD per GB-month
PRICE_PER_GB = 0.023

BYTES_PER_MB = 1024**2
BYTES_PER_GB = 1024**3

SEPARATOR = "-" * 48


def bytes_to_mb(size: Optional[int]) -> float:
    """Convert a byte count to MB, treating an unknown size as zero."""
    if size is None:
        return 0.0
    return size / BYTES_PER_MB


def bytes_to_gb(size: int) -> float:
    return size / BYTES_PER_GB


def estimate_monthly_savings(total_bytes: int) -> float:
    """Estimated monthly storage cost of ``total_bytes`` in USD."""
    return bytes_to_gb(total_bytes) * PRICE_PER_GB


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as RFC 3339 in UTC, e.g. ``2024-01-31T12:00:00Z``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def scan_header(bucket: str, cutoff: datetime, days: int) -> str:
    return (
        f"🔍 Scanning 's3://{bucket}' for objects older than "
        f"{cutoff:%Y-%m-%d} ({days} days)..."
    )


def dry_run_line(key: str, last_modified: datetime, size: Optional[int]) -> str:
    return (
        f"[DRY RUN] Would delete: {key} "
        f"({format_timestamp(last_modified)}, {bytes_to_mb(size):.2f} MB)"
    )


def deleted_line(key: str) -> str:
    return f"🗑️ DELETED: {key}"


def delete_failed_line(key: str, reason: str) -> str:
    return f"⚠️ Failed to delete {key}: {reason}"


def cost_report_lines(stale_count: int, total_bytes: int) -> list[str]:
    """Summary for report-only scans."""
    return [
        "📊 FINOPS COST REPORT",
        f"   • Stale Objects Found: {stale_count}",
        f"   • Total Storage Reclaimable: {bytes_to_gb(total_bytes):.4f} GB",
        f"   • Estimated Monthly Savings: "
        f"${estimate_monthly_savings(total_bytes):.4f}",
        f"   (Based on S3 Standard pricing of ~${PRICE_PER_GB}/GB)",
    ]


def dry_run_summary_lines(stale_count: int, total_bytes: int) -> list[str]:
    """Summary for dry-run scans."""
    return [
        f"✅ Dry run complete. Found {stale_count} stale objects "
        f"({bytes_to_gb(total_bytes):.2f} GB).",
        "   Run with --no-dry-run to execute cleanup.",
    ]


def cleanup_summary_lines(deleted_count: int) -> list[str]:
    """Summary for scans that deleted objects."""
    return [f"✅ Cleanup complete. Deleted {deleted_count} objects."]
