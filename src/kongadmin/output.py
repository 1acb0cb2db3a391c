"""Console rendering for kongadmin.

Plugins, profiles and other documents are written to stdout; status lines
and errors are written to stderr so that ``kongadmin plugins list --json``
can be piped straight into ``jq``.

Three formats are supported. ``json`` prints the Admin API representation,
``plain`` prints tab-separated lines, and ``rich`` prints tables and
highlighted JSON. Without an explicit flag the format is ``rich`` on a
colour terminal and ``plain`` otherwise. ``NO_COLOR`` and ``TERM=dumb``
disable colour the same way ``--no-color`` does.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Iterable, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from kongadmin.models import Plugin


PLUGIN_COLUMNS = ["ID", "NAME", "SCOPE", "ENABLED"]


class OutputFormat(str, Enum):
    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


def plugin_scope(plugin: Plugin) -> str:
    """Describe what a plugin is attached to, e.g. ``route:r1`` or ``global``."""
    for label, ref in (
        ("service", plugin.service),
        ("route", plugin.route),
        ("consumer", plugin.consumer),
    ):
        if ref is not None and ref.id:
            return f"{label}:{ref.id}"
    return "global"


def plugin_row(plugin: Plugin) -> list[str]:
    enabled = "" if plugin.enabled is None else str(plugin.enabled).lower()
    return [plugin.id or "", plugin.name or "", plugin_scope(plugin), enabled]


class OutputManager:
    """Holds the CLI's rendering preferences and writes to the two streams.

    Args:
        format: Requested format; ``AUTO`` is resolved here once.
        no_color: Strip colour and markup from everything printed.
        quiet: Drop ``info`` and ``success`` lines. Errors still print.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        if format == OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format
        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # stdout

    def print_document(self, data: Any) -> None:
        """Print one decoded JSON document, such as a plugin payload."""
        if self._format == OutputFormat.PLAIN:
            for line in _plain_lines(data):
                _write(sys.stdout, line)
            return
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if self._format == OutputFormat.JSON:
            _write(sys.stdout, text)
        else:
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))

    def print_plugin(self, plugin: Plugin) -> None:
        self.print_document(plugin.to_payload())

    def print_plugins(self, plugins: Iterable[Plugin]) -> None:
        """Print a plugin listing.

        JSON output is the list of plugin payloads in server order. The other
        formats show one row per plugin with its scope and enabled flag.
        """
        plugins = list(plugins)
        if self._format == OutputFormat.JSON:
            self.print_document([p.to_payload() for p in plugins])
            return
        self.print_table(PLUGIN_COLUMNS, [plugin_row(p) for p in plugins], title="Plugins")

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        if self._format == OutputFormat.JSON:
            self.print_document([dict(zip(headers, row)) for row in rows])
        elif self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                _write(sys.stdout, "\t".join(line))
        else:
            table = Table(*headers, title=title, header_style="bold cyan")
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    # stderr

    def info(self, message: str) -> None:
        if not self._quiet:
            self._note(message, "")

    def success(self, message: str) -> None:
        if not self._quiet:
            self._note(message, "green")

    def error(self, message: str) -> None:
        if self._no_color:
            _write(sys.stderr, f"Error: {message}")
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {message}")

    def _note(self, message: str, style: str) -> None:
        if self._no_color:
            _write(sys.stderr, message)
        elif style:
            self._stderr.print(f"[{style}]{message}[/{style}]")
        else:
            self._stderr.print(message)


def _write(stream: Any, line: str) -> None:
    print(line, file=stream, flush=True)


def _plain_lines(data: Any) -> list[str]:
    if isinstance(data, dict):
        return [f"{key}\t{value}" for key, value in data.items()]
    if isinstance(data, list):
        return [
            "\t".join(str(v) for v in item.values()) if isinstance(item, dict) else str(item)
            for item in data
        ]
    return [str(data)]


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the process-wide :class:`OutputManager`, creating a default one."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    global _output
    _output = None


def print_document(data: Any) -> None:
    get_output().print_document(data)


def print_plugin(plugin: Plugin) -> None:
    get_output().print_plugin(plugin)


def print_plugins(plugins: Iterable[Plugin]) -> None:
    get_output().print_plugins(plugins)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)
