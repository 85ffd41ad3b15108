"""Application context management for the CLI."""

from dataclasses import dataclass

from idxops.core.metastore import MetastoreResolver, MetastoreUriResolver


@dataclass
class SourceAppContext:
    """Application context holding the metastore resolver for source commands."""

    resolver: MetastoreResolver


def build_source_context() -> SourceAppContext:
    """Build and return the application context for source commands.

    Only the resolver is created here; no metastore is contacted until a
    command runs.
    """
    return SourceAppContext(resolver=MetastoreUriResolver())
