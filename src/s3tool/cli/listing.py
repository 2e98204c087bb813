"""Listing command for the s3tool CLI.

Commands:
- ls: List buckets, or one level of a bucket
"""

from __future__ import annotations

import sys

import click

from s3tool.cli.context import CliContext, pass_context
from s3tool.cli.targets import display_path, split_target
from s3tool.core.types import S3ToolError


@click.command()
@click.argument("target", required=False)
@pass_context
def ls(ctx: CliContext, target: str | None) -> None:
    """List buckets, or the keys under TARGET (bucket or bucket/prefix/).

    Only one level is listed: deeper keys are folded into directories.
    """
    try:
        if not target:
            for name in ctx.store.list_buckets():
                click.echo(name)
            return

        bucket, prefix = split_target(target)
        for entry in ctx.store.list_objects(bucket, prefix=prefix, delimiter="/"):
            click.echo(display_path(entry.key, ctx.config.fullpath))
    except S3ToolError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
