"""Transfer commands for the s3tool CLI.

Commands:
- up: Upload a local file to a bucket
- dl: Download an object to a local file

With --precheck, both compare fingerprints first, print a report and exit
with the configured unchanged/changed/failed code.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from s3tool.cli.context import CliContext, pass_context
from s3tool.cli.targets import download_path, split_target, upload_key
from s3tool.core.types import ChangeRecord, S3ToolError
from s3tool.sync import (
    DownloadRequest,
    TransferExecutor,
    TransferRequest,
    UploadRequest,
    exit_code_for,
    format_report,
)


def run_checked(ctx: CliContext, request: TransferRequest) -> None:
    """Run a change-checked transfer, print the report and exit."""
    record: ChangeRecord | None = None
    error: S3ToolError | None = None
    try:
        record = TransferExecutor(ctx.store).execute(request)
    except S3ToolError as e:
        record = e.record
        error = e

    click.echo(format_report(record))
    if error is not None:
        click.echo(f"Error: {error}", err=True)
    sys.exit(exit_code_for(record, error, ctx.config.exit_codes))


@click.command()
@click.argument("src")
@click.argument("dest")
@pass_context
def up(ctx: CliContext, src: str, dest: str) -> None:
    """Upload SRC to DEST (bucket/path/to or bucket/dir/).

    The uploaded object's ETag is checked against the local MD5.
    """
    bucket, key = split_target(dest)
    key = upload_key(src, key)
    config = ctx.config

    if config.precheck:
        run_checked(ctx, UploadRequest(
            local_path=Path(src),
            bucket=bucket,
            key=key,
            content_type=config.mime_type,
            acl=config.acl,
            dry_run=config.dry_run,
        ))
        return

    try:
        TransferExecutor(ctx.store).put_file(
            bucket, key, Path(src), config.mime_type, config.acl
        )
    except S3ToolError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.command()
@click.argument("source")
@click.argument("dest", default=".")
@pass_context
def dl(ctx: CliContext, source: str, dest: str) -> None:
    """Download SOURCE (bucket/path/to) to DEST.

    DEST defaults to the current directory; when it names a directory the
    object's file name is kept.
    """
    bucket, key = split_target(source)
    local_path = download_path(key, dest)

    if ctx.config.precheck:
        run_checked(ctx, DownloadRequest(
            bucket=bucket,
            key=key,
            local_path=local_path,
            mkdir_parents=True,
            dry_run=ctx.config.dry_run,
        ))
        return

    try:
        TransferExecutor(ctx.store).get_file(bucket, key, local_path)
    except S3ToolError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
