"""Command line entry point: extract translatable strings from a source tree."""

import os
from typing import List, Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from infrastructure.cache import CacheError
from infrastructure.configuration import settings
from infrastructure.i18n import OutputFormat, TranslationError
from infrastructure.logging import add_app_info, configure_logging, get_module_logger
from modules.extraction import __version__
from modules.extraction.exceptions import ExtractionError
from modules.extraction.factory import ExtractOptions, create_extract_task

APP_NAME = "translation-extract"

load_dotenv()

app = typer.Typer(
    name=APP_NAME,
    help="Extract strings from files for translation.",
    add_completion=False,
)
console = Console(soft_wrap=True)
error_console = Console(stderr=True, soft_wrap=True)
logger = get_module_logger()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"{APP_NAME} {__version__}")
        raise typer.Exit()


@app.command()
def extract(
    input: Optional[List[str]] = typer.Option(
        None,
        "--input",
        "-i",
        help="Paths to extract strings from. Glob patterns and brace expansion "
        "are supported. Defaults to the current directory.",
    ),
    output: List[str] = typer.Option(
        ...,
        "--output",
        "-o",
        help="Files or directories to save extracted strings to. "
        "Brace expansion is supported.",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.JSON, "--format", "-f", case_sensitive=False, help="Output format"
    ),
    format_indentation: str = typer.Option(
        "\t", "--format-indentation", help="Indentation of JSON output"
    ),
    replace: bool = typer.Option(
        False, "--replace", "-r", help="Replace the output file contents instead of merging"
    ),
    sort: bool = typer.Option(False, "--sort", "-s", help="Sort strings by key"),
    sort_original_order: bool = typer.Option(
        False,
        "--sort-original-order",
        help="Keep the order of the existing output and insert new strings",
    ),
    sort_sensitivity: Optional[str] = typer.Option(
        None,
        "--sort-sensitivity",
        help="Collation sensitivity when sorting: base, accent, case or variant",
    ),
    po_source_locations: bool = typer.Option(
        True,
        "--po-source-locations/--no-po-source-locations",
        help="Write source file references in gettext output",
    ),
    clean: bool = typer.Option(
        False, "--clean", "-c", help="Remove strings no longer found in the sources"
    ),
    cache_file: Optional[str] = typer.Option(
        None, "--cache-file", help="Cache extraction results to speed up later runs"
    ),
    marker: Optional[str] = typer.Option(
        None, "--marker", "-m", help="Name of a custom marker function"
    ),
    key_as_default_value: bool = typer.Option(
        False, "--key-as-default-value", "-k", help="Use the key as default value"
    ),
    key_as_initial_default_value: bool = typer.Option(
        False,
        "--key-as-initial-default-value",
        help="Use the key as default value for new strings only",
    ),
    null_as_default_value: bool = typer.Option(
        False, "--null-as-default-value", "-n", help="Use null as default value"
    ),
    string_as_default_value: Optional[str] = typer.Option(
        None, "--string-as-default-value", "-d", help="Use a fixed string as default value"
    ),
    strip_prefix: Optional[str] = typer.Option(
        None, "--strip-prefix", help="Strip a prefix from extracted keys"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (defaults to LOG_LEVEL)"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
):
    """Extract strings from files for translation."""
    configure_logging(
        log_level=log_level or settings.LOG_LEVEL,
        extra_processors=[add_app_info(APP_NAME, __version__)],
    )

    try:
        options = ExtractOptions(
            input=input or [os.getcwd()],
            output=output,
            format=output_format,
            format_indentation=format_indentation,
            replace=replace,
            sort=sort,
            sort_original_order=sort_original_order,
            sort_sensitivity=sort_sensitivity,
            po_source_locations=po_source_locations,
            clean=clean,
            cache_file=cache_file,
            marker=marker,
            key_as_default_value=key_as_default_value,
            key_as_initial_default_value=key_as_initial_default_value,
            null_as_default_value=null_as_default_value,
            string_as_default_value=string_as_default_value,
            strip_prefix=strip_prefix,
        )
        results = create_extract_task(options).execute()
    except ValidationError as e:
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or "options"
            error_console.print(f"[red]Invalid option {location}: {escape(error['msg'])}[/red]")
        raise typer.Exit(1)
    except (ExtractionError, CacheError, TranslationError, ValueError) as e:
        logger.error("extraction_failed", error=str(e))
        error_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    for result in results:
        console.print(
            f"[dim]- {escape(result.path)}[/dim] "
            f"[green]\\[{result.action.upper()}][/green] {result.count} strings"
        )


if __name__ == "__main__":
    app()
