"""
CLI Interface
=============
Command-line interface for the quiz parser.

Usage:
    quiz-parser parse <path> [options]
    quiz-parser search <path> [query] [options]
"""

from __future__ import annotations

import json
import os
import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .engine import ParserConfig, ParserEngine
from .models import ParseResult, Question
from .search import SearchIndex
from .sources import SourceUnavailable

console = Console()

QUIT_COMMAND = ":q"


@click.group()
@click.version_option(version=__version__, prog_name="quiz-parser")
def cli():
    """Quiz Parser: extract and search questions in table-formatted documents."""
    pass


def _common_options(func):
    """Options shared by every command that loads a document."""
    options = [
        click.option(
            "--encoding",
            default="utf-8",
            help="Text encoding for plain-text documents",
        ),
        click.option(
            "--page-start",
            default=None,
            type=int,
            help="Start page for PDFs (1-indexed)",
        ),
        click.option(
            "--page-end",
            default=None,
            type=int,
            help="End page for PDFs (1-indexed, inclusive)",
        ),
        click.option(
            "--log-file",
            default=None,
            help="Path to log file",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_config(
    encoding: str,
    page_start: Optional[int],
    page_end: Optional[int],
    log_level: str,
    log_file: Optional[str],
) -> ParserConfig:
    page_range = None
    if page_start is not None or page_end is not None:
        page_range = (
            page_start if page_start is not None else 1,
            page_end if page_end is not None else 99999,
        )

    return ParserConfig(
        encoding=encoding,
        page_range=page_range,
        log_level=log_level,
        log_file=log_file,
    )


def _load(config: ParserConfig, path: str) -> ParseResult:
    """Run the engine, exiting with status 1 if the document can't be read."""
    try:
        return ParserEngine(config).parse(path)
    except SourceUnavailable as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)


@cli.command()
@click.argument("path", type=click.Path())
@_common_options
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output only JSON result to stdout (for programmatic use)",
)
def parse(
    path: str,
    encoding: str,
    page_start: Optional[int],
    page_end: Optional[int],
    log_file: Optional[str],
    log_level: str,
    json_output: bool,
):
    """Extract all questions from a document."""

    if json_output:
        # Keep stdout clean for JSON consumers
        log_level = "ERROR"

    config = _build_config(encoding, page_start, page_end, log_level, log_file)

    if json_output:
        result = _load(config, path)
        print(json.dumps(
            result.model_dump(mode="json"),
            indent=2,
            ensure_ascii=False,
        ))
        return

    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]Quiz Parser v{__version__}[/]\n"
            f"[dim]Parsing: {escape(os.path.basename(path))}[/]",
            border_style="cyan",
        )
    )
    console.print()

    result = _load(config, path)

    if not result.questions:
        console.print("No questions found")
        return

    for question in result.questions:
        _display_question(question)

    _display_validation_table(result.validation.model_dump())


@cli.command()
@click.argument("path", type=click.Path())
@click.argument("query", required=False)
@_common_options
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
def search(
    path: str,
    query: Optional[str],
    encoding: str,
    page_start: Optional[int],
    page_end: Optional[int],
    log_file: Optional[str],
    log_level: str,
):
    """
    Search questions and options for QUERY.

    Without QUERY, prompts for queries until end of input or ':q'.
    """
    config = _build_config(encoding, page_start, page_end, log_level, log_file)
    result = _load(config, path)

    if not result.questions:
        console.print("No questions found")
        return

    index = SearchIndex()
    index.prime(result.questions)

    if query is not None:
        _display_search(index, query)
        return

    while True:
        try:
            entered = click.prompt("Search", default="", show_default=False)
        except click.Abort:
            break
        if entered == QUIT_COMMAND:
            break
        _display_search(index, entered)


# ─── Display Helpers ──────────────────────────────────────────────────────────


def _display_search(index: SearchIndex, query: str):
    if not query:
        console.print("Search for questions")
        return

    hits = index.search(query)
    if not hits:
        console.print(f'No results for "{escape(query)}"')
        return

    console.print(f"[dim]{len(hits)} of {len(index)} questions match[/]")
    console.print()
    for question in hits:
        _display_question(question)


def _display_question(question: Question):
    """Print one question with its options, highlighting the answer."""
    console.print(f"[bold]{question.number}. {escape(question.text)}[/]")
    for key, text in question.options.items():
        line = f"  {key}. {escape(text)}"
        if key == question.answer:
            console.print(f"[bold green]{line}[/]")
        else:
            console.print(line)
    console.print(f"  [italic]Marks: {question.marks}[/]")
    console.print()


def _display_validation_table(validation: dict):
    """Display validation report as a rich table."""
    table = Table(title="Validation Report", border_style="green")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Status", justify="center")

    def status_icon(count, threshold=0):
        if count <= threshold:
            return "[green]✓[/]"
        return "[red]✗[/]"

    total = validation.get("total_questions", 0)
    complete = validation.get("complete_questions", 0)
    rate = validation.get("complete_rate", 0)

    table.add_row(
        "Total Questions",
        str(total),
        "[green]✓[/]" if total > 0 else "[red]✗[/]",
    )
    table.add_row(
        "Complete Questions",
        f"{complete} ({rate}%)",
        "[green]✓[/]" if rate >= 90 else "[yellow]⚠[/]",
    )

    missing = validation.get("missing_number_count", 0)
    table.add_row("Missing Numbers", str(missing), status_icon(missing))

    for label, key in [
        ("Duplicate Numbers", "duplicate_question_numbers"),
        ("Missing Answer", "questions_missing_answer"),
        ("Missing Options", "questions_missing_options"),
        ("Unknown Answer", "questions_with_unknown_answer"),
    ]:
        values = validation.get(key, [])
        table.add_row(label, str(len(values)), status_icon(len(values)))

    table.add_row("Total Marks", str(validation.get("total_marks", 0)), "")

    console.print(table)
    console.print()


# ─── Entry point (for python -m quiz_parser.cli) ──────────────────────────────


if __name__ == "__main__":
    cli()
