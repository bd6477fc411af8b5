#!/usr/bin/env python3
"""Command line interface: numerize text given as arguments or on stdin."""
from __future__ import annotations

import sys
from collections.abc import Iterable

import rich_click as click
from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich_click import RichCommand

from . import __version__
from .core.config import load_config
from .exceptions import ConfigurationError, UnsupportedLocaleError, UnsupportedNumberingSystemError
from .numerization.rule_set import StageResult, supported_choices
from .numerizer import Numerizer

# Set up rich-click configuration globally
click.rich_click.TEXT_MARKUP = "rich"
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "#ff5555"
click.rich_click.ERRORS_SUGGESTION = "Try running the '--help' flag for more information."
click.rich_click.MAX_WIDTH = 120
click.rich_click.COLOR_SYSTEM = "auto"
click.rich_click.ALIGN_OPTIONS_SWITCHES = True
click.rich_click.STYLE_OPTION = "#ff79c6"  # Dracula Pink - for option flags
click.rich_click.STYLE_SWITCH = "#50fa7b"  # Dracula Green - for switches
click.rich_click.STYLE_METAVAR = "#8BE9FD not bold"
click.rich_click.STYLE_HEADER_TEXT = "bold yellow"
click.rich_click.STYLE_USAGE = "#BD93F9"  # Purple - for "Usage:" line
click.rich_click.STYLE_USAGE_COMMAND = "bold"
click.rich_click.STYLE_HELPTEXT = "#B3B8C0"
click.rich_click.STYLE_OPTION_DEFAULT = "#ffb86c"  # Dracula Orange


def _supported_help() -> str:
    return ", ".join(f"{locale.value}/{system.value}" for locale, system in supported_choices())


def _read_lines(text: tuple[str, ...]) -> Iterable[str]:
    if text:
        yield " ".join(text)
        return

    for line in sys.stdin:
        yield line.rstrip("\r\n")


def _explain_table(results: list[StageResult]) -> Table:
    table = Table(title="Numerization stages", show_header=True, header_style="bold magenta")
    table.add_column("Stage", style="cyan", no_wrap=True)
    table.add_column("Text", style="green")

    for result in results:
        table.add_row(result.stage, Text(result.text))
    return table


@click.command(cls=RichCommand, context_settings={"help_option_names": ["-h", "--help"], "max_content_width": 120})
@click.version_option(version=__version__, prog_name="numerizer")
@click.argument("text", nargs=-1)
@click.option("-l", "--locale", type=str, help="🌍 Language of the text (e.g., en)")
@click.option("-n", "--numbering-system", type=str, help="🔢 Digits to write numbers with (e.g., latn)")
@click.option("-p", "--precision", type=click.IntRange(min=0), help="📐 Decimal places of mixed numbers")
@click.option("--explain", is_flag=True, help="🔍 Show the text after every pipeline stage")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="⚙️ Path to custom config file",
)
def main(
    text: tuple[str, ...],
    locale: str | None,
    numbering_system: str | None,
    precision: int | None,
    explain: bool,
    config_path: str | None,
) -> None:
    """
    🔢 [bold]Numerizer[/bold] - turn numbers written out in words into numbers.

    Numerizes TEXT, or every line of standard input when no TEXT is given.

    [dim]Example:[/dim] numerizer "two hundred and fifty five" prints 255
    """
    try:
        if config_path:
            load_config(config_path)
        numerizer = Numerizer(locale=locale, numbering_system=numbering_system, precision=precision)
    except UnsupportedLocaleError as e:
        raise click.BadParameter(f"{e}. Supported: {_supported_help()}", param_hint="'--locale'") from e
    except UnsupportedNumberingSystemError as e:
        raise click.BadParameter(
            f"{e}. Supported: {_supported_help()}", param_hint="'--numbering-system'"
        ) from e
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e

    console = Console() if explain else None
    for line in _read_lines(text):
        if console is not None:
            console.print(_explain_table(numerizer.explain(line)))
        else:
            click.echo(numerizer.numerize(line))


if __name__ == "__main__":
    main()
