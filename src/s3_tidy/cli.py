"""Command-line interface for s3-tidy.

Commands:
    - scan: Find objects older than an age threshold and report, simulate
      or perform their deletion

Client options (--region, --endpoint-url, --aws-profile) are passed through
to boto3; credentials come from its default credential chain.
"""

from typing import Annotated, Optional

import typer

from . import __version__
from .objectstorage import run_scan

app = typer.Typer(
    name="s3-tidy",
    help="Cloud governance tool for S3 cleanup.",
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"s3-tidy {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    Enforce retention policies and estimate cost savings on stale S3 objects.
    """
    if ctx.invoked_subcommand is None:
        typer.echo("Please use the 'scan' command. Try 's3-tidy scan --help'")


@app.command("scan")
def scan_cmd(
    bucket: Annotated[
        str,
        typer.Option("--bucket", "-b", help="Target S3 bucket name (required)"),
    ],
    days: Annotated[
        int, typer.Option("--days", "-d", help="Age threshold in days")
    ] = 30,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run/--no-dry-run",
            help="Simulate deletion without taking action",
        ),
    ] = True,
    report: Annotated[
        bool,
        typer.Option(
            "--report", help="Generate a cost-savings report without deleting"
        ),
    ] = False,
    # S3 client options
    region_name: Annotated[
        Optional[str], typer.Option("--region", help="AWS region name")
    ] = None,
    endpoint_url: Annotated[
        Optional[str], typer.Option("--endpoint-url", help="Custom S3 endpoint URL")
    ] = None,
    aws_profile: Annotated[
        Optional[str],
        typer.Option("--aws-profile", help="AWS CLI profile name"),
    ] = None,
) -> None:
    """
    Scan a bucket for stale objects.

    Examples:
        Cost report: s3-tidy scan --bucket my-bucket --days 90 --report
        Dry run:     s3-tidy scan -b my-bucket -d 30
        Delete:      s3-tidy scan -b my-bucket -d 30 --no-dry-run
    """
    try:
        run_scan(
            bucket=bucket,
            days=days,
            dry_run=dry_run,
            report_only=report,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
            echo=typer.echo,
        )
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
