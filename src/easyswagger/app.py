"""Root ``easyswagger`` command.

Global flags (output mode, ``--force``, ``--no-input``, ``-o``) are parsed
once in :func:`main_callback` and handed to sub-commands through
``ctx.obj`` and the process-wide :class:`~easyswagger.output.OutputManager`.

:func:`main` is the console-script entry point. An
:class:`~easyswagger.exceptions.EasySwaggerError` escaping a command ends
the process with that error's exit code; any other exception leaves a
traceback under ``<data dir>/logs`` and exits with status 1.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import typer

from easyswagger import __version__
from easyswagger.commands.browse import (
    copy_command,
    forget_command,
    paths_command,
    show_command,
)
from easyswagger.commands.config import cache_app, config_app
from easyswagger.exceptions import EasySwaggerError
from easyswagger.exit_codes import EXIT_GENERIC_FAILURE

if TYPE_CHECKING:
    from easyswagger.exceptions import ConfigError
    from easyswagger.output import OutputFormat

EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="easyswagger",
    help="Browse OpenAPI/Swagger endpoints and copy them as simplified JSON.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("paths")(paths_command)
app.command("show")(show_command)
app.command("copy")(copy_command)
app.command("forget")(forget_command)
app.add_typer(config_app, name="config", help="Read and change settings.")
app.add_typer(cache_app, name="cache", help="Inspect or empty the document cache.")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"easyswagger {__version__}")
        raise typer.Exit()


def _configured_format(
    json_output: bool, plain_output: bool
) -> tuple[OutputFormat, Optional[ConfigError]]:
    """Pick the output format; returns ``(format, config_error_or_None)``."""
    from easyswagger.config import load_global_config
    from easyswagger.exceptions import ConfigError
    from easyswagger.output import OutputFormat

    if json_output:
        return OutputFormat.JSON, None
    if plain_output:
        return OutputFormat.PLAIN, None
    try:
        return OutputFormat(load_global_config().output.format), None
    except ConfigError as exc:
        return OutputFormat.AUTO, exc
    except ValueError:
        return OutputFormat.AUTO, None


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Print the easyswagger version.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON."),
    plain_output: bool = typer.Option(False, "--plain", help="Emit tab-separated text."),
    no_color: bool = typer.Option(False, "--no-color", help="Never use colour."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only warnings and errors on stderr."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show [debug] lines."),
    force: bool = typer.Option(False, "--force", "-f", help="Do not ask for confirmation."),
    no_input: bool = typer.Option(
        False, "--no-input", help="Never prompt, not even for a browser sign-in."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Append data to FILE instead of stdout."
    ),
) -> None:
    """Browse an OpenAPI document from a URL, a file or stdin."""
    from easyswagger.output import OutputManager, set_output, warning

    fmt, config_error = _configured_format(json_output, plain_output)
    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )
    if config_error is not None:
        warning(str(config_error))

    ctx.ensure_object(dict)
    ctx.obj.update(force=force, no_input=no_input, verbose=verbose, output_file=output_file)


def _setup_signal_handlers() -> None:
    def _on_sigint(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nInterrupted.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _on_sigint)


def _write_crash_log(exc: Exception) -> Path:
    """Save the active traceback as ``crash-<timestamp>.log``."""
    from easyswagger.config import get_data_dir

    log_dir = get_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    target = log_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    target.write_text(f"{type(exc).__name__}: {exc}\n\n{traceback.format_exc()}", encoding="utf-8")
    return target


def main() -> None:
    """Console-script entry point; always ends in ``SystemExit``."""
    from easyswagger.output import error

    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nInterrupted.\n")
        sys.exit(EXIT_INTERRUPTED)
    except EasySwaggerError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error; traceback saved to {_write_crash_log(exc)}")
        sys.exit(EXIT_GENERIC_FAILURE)
