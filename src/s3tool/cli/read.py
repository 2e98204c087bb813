"""Read commands for the s3tool CLI.

Commands:
- cat: Write an object to stdout
- zcat: Write a gzip-compressed object to stdout, decompressed
"""

from __future__ import annotations

import contextlib
import gzip
import shutil
import sys

import click

from s3tool.cli.context import CliContext, pass_context
from s3tool.cli.targets import split_target
from s3tool.core.types import S3ToolError


def _copy_object(ctx: CliContext, target: str, decompress: bool) -> None:
    bucket, key = split_target(target)
    if not key:
        raise click.BadParameter(f"no key in {target!r}")
    out = click.get_binary_stream("stdout")
    try:
        body = ctx.store.get_object(bucket, key)
        with contextlib.closing(body.stream):
            if decompress:
                with gzip.GzipFile(fileobj=body.stream, mode="rb") as gz:
                    shutil.copyfileobj(gz, out)
            else:
                shutil.copyfileobj(body.stream, out)
        out.flush()
    except (S3ToolError, OSError, EOFError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.command()
@click.argument("target")
@pass_context
def cat(ctx: CliContext, target: str) -> None:
    """Print the object TARGET (bucket/path/to)."""
    _copy_object(ctx, target, decompress=False)


@click.command()
@click.argument("target")
@pass_context
def zcat(ctx: CliContext, target: str) -> None:
    """Print the gzip-compressed object TARGET, decompressed."""
    _copy_object(ctx, target, decompress=True)
