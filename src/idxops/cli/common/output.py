"""Output formatting utilities for the CLI."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from rich.box import Box
from rich.console import Console
from rich.markup import escape
from rich.measure import Measurement
from rich.segment import Segments
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from idxops.core.models import (
    CheckpointRow,
    ParamsRow,
    SourceDescription,
    SourceRow,
)

_THEME = Theme(
    {
        "err": "bold red",
        "title": "bold cyan",
    }
)

# PostgreSQL-style box: ` a | b ` header, `---+---` rule, no outer border.
PSQL = Box(
    "    \n"
    "  | \n"
    " -+ \n"
    "  | \n"
    " -+ \n"
    " -+ \n"
    "  | \n"
    "    \n",
    ascii=True,
)

_MAX_TABLE_WIDTH = 1_000_000

console = Console(theme=_THEME)
err_console = Console(theme=_THEME, stderr=True)


def format_json_value(value: Any) -> str:
    """Render a parameter value as compact JSON text (`"x"`, `42`, `["a","b"]`)."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def make_table(
    title: str, headers: Sequence[str], rows: Iterable[Sequence[str]]
) -> Table:
    """Build a titled, left-aligned PostgreSQL-style table."""
    t = Table(
        title=title,
        title_justify="left",
        title_style="title",
        box=PSQL,
        show_edge=False,
        show_lines=False,
    )
    for header in headers:
        t.add_column(header, justify="left", no_wrap=True, overflow="ignore")
    for row in rows:
        # Text cells so values such as `[x]` are never read as markup.
        t.add_row(*(Text(cell) for cell in row))
    return t


def _print_table(t: Table) -> None:
    """Print a table at its natural width; cells are never wrapped or cut."""
    options = console.options
    natural = Measurement.get(console, options.update_width(_MAX_TABLE_WIDTH), t)
    width = max(options.max_width, natural.maximum)
    console.print(Segments(console.render(t, options.update_width(width))), crop=False)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def error(self, msg: str) -> None:
        """Print an error message."""
        err_console.print(f"[err]✗[/] {escape(msg)}")

    def sources_table(self, rows: Iterable[SourceRow], title: str = "Sources") -> None:
        """
        Expects objects with .source_id .source_type
        (e.g. idxops.core.models.SourceRow)
        """
        _print_table(
            make_table(
                title, ["ID", "Type"], ((r.source_id, r.source_type) for r in rows)
            )
        )

    def params_table(self, rows: Iterable[ParamsRow], title: str = "Parameters") -> None:
        """Render flattened source parameters; values are shown as JSON."""
        _print_table(
            make_table(
                title,
                ["Key", "Value"],
                ((r.key, format_json_value(r.value)) for r in rows),
            )
        )

    def checkpoint_table(
        self, rows: Iterable[CheckpointRow], title: str = "Checkpoint"
    ) -> None:
        """Render checkpoint positions per partition."""
        _print_table(
            make_table(
                title,
                ["Partition ID", "Offset"],
                ((r.partition_id, r.offset) for r in rows),
            )
        )

    def source_description(self, description: SourceDescription) -> None:
        """Render the Source, Parameters and Checkpoint tables, blank-line separated."""
        self.sources_table(description.source, title="Source")
        console.print()
        self.params_table(description.params)
        console.print()
        self.checkpoint_table(description.checkpoint)


out = Out()
