"""Terminal output for easyswagger: data on stdout, diagnostics on stderr.

Whatever a user pipes into ``pbcopy`` or ``jq`` (endpoint listings, endpoint
JSON, copy payloads) is written to stdout and nothing else is. Status lines,
warnings, errors, hints, and debug traces all go to stderr.

When stdout is a terminal the listings are Rich tables and JSON is syntax
highlighted; when it is a pipe or ``-o FILE`` is given, plain text is
written instead. ``NO_COLOR``, ``TERM=dumb``, and ``--no-color`` all turn
colour off.

:class:`OutputManager` holds those choices. :func:`~easyswagger.app.main_callback`
builds one per invocation and installs it with :func:`set_output`; the rest
of the CLI writes through the module-level helpers (:func:`info`,
:func:`error`, :func:`debug`, ...). The parser package never imports this
module.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from easyswagger.models import EndpointGroup, EndpointInfo


class OutputFormat(str, Enum):
    """Output modes selectable with ``--json``, ``--plain`` or ``output.format``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


_METHOD_STYLES = {
    "GET": "bold blue",
    "POST": "bold green",
    "PUT": "bold yellow",
    "DELETE": "bold red",
    "PATCH": "bold magenta",
}


class OutputManager:
    """Writes listings and JSON to stdout, and status lines to stderr.

    Args:
        format: Requested format; ``AUTO`` becomes ``RICH`` on a colour
            capable terminal and ``PLAIN`` everywhere else.
        no_color: Turn off colour even on a terminal.
        quiet: Hide info, success and suggestion lines.
        verbose: Show ``[debug]`` lines.
        output_file: Append data to this path rather than stdout.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._output_file = output_file

        self._format = format
        if format == OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._no_color
            self._format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN

        rich_mode = self._format == OutputFormat.RICH
        self._stdout = Console(file=sys.stdout, no_color=self._no_color, force_terminal=rich_mode)
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # -- stdout ---------------------------------------------------------- #

    def print_data(self, text: str) -> None:
        """One chunk of data, newline-terminated, to stdout or the ``-o`` file."""
        if not self._output_file:
            print(text, file=sys.stdout, flush=True)
            return
        suffix = "" if text.endswith("\n") else "\n"
        with open(self._output_file, "a", encoding="utf-8") as fh:
            fh.write(text + suffix)

    def print_json(self, data: Any) -> None:
        """Print a JSON-serialisable value.

        Rich mode highlights the JSON; every other mode, and file output,
        writes it as plain indented text so that it can be piped.
        """
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if self._format == OutputFormat.RICH and not self._output_file:
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))
        else:
            self.print_data(text)

    def print_endpoint_groups(
        self,
        groups: list[EndpointGroup],
        endpoints: dict[str, EndpointInfo],
        title: Optional[str] = None,
    ) -> None:
        """Print grouped endpoints in the active format.

        * **Rich mode** -- one table per group with coloured methods.
        * **JSON mode** -- a list of ``{"group", "path", "methods", "tags"}``
          records.
        * **Plain mode** -- tab-separated ``group, methods, path`` lines.
        """
        if self._format == OutputFormat.JSON:
            records = [
                {
                    "group": group.name,
                    "path": path,
                    "methods": list(endpoints[path].methods),
                    "tags": _tags_of(endpoints[path]),
                    **({"error": endpoints[path].error} if endpoints[path].error else {}),
                }
                for group in groups
                for path in group.paths
            ]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
            return

        if self._format == OutputFormat.PLAIN or self._output_file:
            for group in groups:
                for path in group.paths:
                    methods = ",".join(endpoints[path].methods) or "-"
                    self.print_data(f"{group.name}\t{methods}\t{path}")
            return

        if title:
            self._stdout.print(f"[bold]{title}[/bold]")
        for group in groups:
            table = Table(
                title=f"{group.name} ({len(group.paths)})",
                title_justify="left",
                show_header=True,
                header_style="bold cyan",
            )
            table.add_column("Methods")
            table.add_column("Path")
            table.add_column("Tags")
            for path in group.paths:
                info = endpoints[path]
                methods = " ".join(
                    f"[{_METHOD_STYLES.get(m, 'bold')}]{m}[/]" for m in info.methods
                ) or "[dim]-[/dim]"
                note = f" [red]({info.error})[/red]" if info.error else ""
                table.add_row(methods, f"{path}{note}", ", ".join(_tags_of(info)))
            self._stdout.print(table)

    # -- stderr ---------------------------------------------------------- #

    def _emit(self, plain: str, markup: str) -> None:
        # Rich markup is only interpreted on the colored path.
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup)

    def info(self, message: str) -> None:
        """Informational line; hidden by ``--quiet``."""
        if not self._quiet:
            self._emit(message, message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._emit(message, f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        """Shown even with ``--quiet``."""
        self._emit(f"Warning: {message}", f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        self._emit(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def suggest(self, message: str) -> None:
        """Next-step hint, e.g. a command to try; hidden by ``--quiet``."""
        if not self._quiet:
            self._emit(f"→ {message}", f"[dim]→ {message}[/dim]")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._emit(f"[debug] {message}", f"[dim]\\[debug] {message}[/dim]")


def _tags_of(info: EndpointInfo) -> list[str]:
    """Distinct tags across all methods of an endpoint, in first-seen order."""
    seen: dict[str, None] = {}
    for method in info.methods.values():
        for tag in method.tags:
            seen.setdefault(tag, None)
    return list(seen)


# -- environment --------------------------------------------------------- #


def _is_tty() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _should_disable_color() -> bool:
    """``NO_COLOR`` (any value, even empty) or ``TERM=dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# -- process-wide manager ------------------------------------------------- #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """The manager installed by the CLI callback, or a default one."""
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


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_json(data: Any) -> None:
    get_output().print_json(data)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def debug(message: str) -> None:
    get_output().debug(message)
