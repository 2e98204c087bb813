"""Command-line interface for s3tool.

This module provides the main CLI entry point and assembles all commands.

Commands:
- ls: List buckets or keys
- up: Upload a local file
- dl: Download an object
- cat: Print an object
- zcat: Print a gzip-compressed object, decompressed
"""

from __future__ import annotations

import click

from s3tool.cli.config import get_config_dir, get_config_file, load_config
from s3tool.cli.context import CliContext
from s3tool.cli.listing import ls
from s3tool.cli.logging_setup import setup_logging
from s3tool.cli.read import cat, zcat
from s3tool.cli.transfer import dl, up
from s3tool.core.config import (
    DEFAULT_ACL,
    DEFAULT_MIME_TYPE,
    DEFAULT_REGION,
    ExitCodes,
    ToolConfig,
)


@click.group()
@click.version_option(package_name="s3tool")
@click.option("--region", default=DEFAULT_REGION, show_default=True, help="AWS region.")
@click.option("--profile", "-p", default=None, help="AWS profile name.")
@click.option("--endpoint-url", default=None, help="Custom S3 endpoint (MinIO, ...).")
@click.option("--acl", default=DEFAULT_ACL, show_default=True, help="ACL of uploaded files.")
@click.option(
    "--mime-type", default=DEFAULT_MIME_TYPE, show_default=True, help="MIME type of uploaded files."
)
@click.option("--rc-ok", type=int, default=0, show_default=True, help="Unchanged return code.")
@click.option("--rc-changed", type=int, default=254, show_default=True, help="Changed return code.")
@click.option("--rc-failed", type=int, default=255, show_default=True, help="Failed return code.")
@click.option("--precheck", is_flag=True, help="Compare MD5 and ETag before transferring.")
@click.option("--dry", "dry_run", is_flag=True, help="With --precheck, only report the verdict.")
@click.option("--fullpath", is_flag=True, help="Show full keys in listings.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    region: str,
    profile: str | None,
    endpoint_url: str | None,
    acl: str,
    mime_type: str,
    rc_ok: int,
    rc_changed: int,
    rc_failed: int,
    precheck: bool,
    dry_run: bool,
    fullpath: bool,
    verbose: bool,
) -> None:
    """s3tool - Unix-like file operations on S3 buckets."""
    setup_logging(verbose)
    config = ToolConfig(
        region=region,
        profile=profile,
        acl=acl,
        mime_type=mime_type,
        exit_codes=ExitCodes(ok=rc_ok, changed=rc_changed, failed=rc_failed),
        precheck=precheck,
        dry_run=dry_run,
        fullpath=fullpath,
    )
    ctx.obj = CliContext(config=config, endpoint_url=endpoint_url)


# Listing
cli.add_command(ls)

# Transfers
cli.add_command(up)
cli.add_command(dl)

# Reads
cli.add_command(cat)
cli.add_command(zcat)


def main() -> None:
    """Entry point for the CLI."""
    try:
        defaults = load_config()
    except ValueError as e:
        raise SystemExit(f"Error: {e}") from e
    cli(auto_envvar_prefix="S3TOOL", default_map=defaults)


__all__ = [
    # Main entry points
    "cli",
    "main",
    # Config utilities
    "get_config_dir",
    "get_config_file",
    "load_config",
]
