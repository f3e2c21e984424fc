"""Scan configuration schema for s3-tidy."""

from pydantic import BaseModel, ConfigDict, Field


class ScanConfig(BaseModel):
    """Inputs for a single stale-object scan.

    Frozen so the configuration cannot change while a scan is running.
    When ``report_only`` is set no deletion is attempted, regardless of
    ``dry_run``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    bucket: str = Field(..., min_length=1, description="Target bucket name")
    days: int = Field(default=30, ge=0, description="Age threshold in days")
    dry_run: bool = Field(
        default=True, description="Simulate deletion without taking action"
    )
    report_only: bool = Field(
        default=False, description="Generate a cost-savings report without deleting"
    )

    @property
    def mode(self) -> str:
        """Name of the execution mode this configuration selects."""
        if self.report_only:
            return "report"
        if self.dry_run:
            return "dry-run"
        return "delete"
