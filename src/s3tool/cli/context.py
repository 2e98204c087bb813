"""Per-invocation state shared by CLI commands."""

from __future__ import annotations

from dataclasses import dataclass, field

import click

from s3tool.core.config import ToolConfig
from s3tool.storage import ObjectStore, S3ObjectStore


@dataclass
class CliContext:
    """Configuration plus the lazily created object store.

    Attributes:
        config: Immutable configuration built from the global options.
        endpoint_url: Custom S3 endpoint, if any.
    """

    config: ToolConfig
    endpoint_url: str | None = None
    _store: ObjectStore | None = field(default=None, repr=False)

    @property
    def store(self) -> ObjectStore:
        """Object store, created on first use."""
        if self._store is None:
            self._store = S3ObjectStore(
                region=self.config.region,
                profile=self.config.profile,
                endpoint_url=self.endpoint_url,
            )
        return self._store


pass_context = click.make_pass_decorator(CliContext)
