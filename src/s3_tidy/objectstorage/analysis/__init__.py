"""Object storage analysis operations."""

from .stale_scan import ScanResult, StaleObjectScanner, compute_cutoff, run_scan

__all__ = ["ScanResult", "StaleObjectScanner", "compute_cutoff", "run_scan"]
