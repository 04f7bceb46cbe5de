"""CLI entry point for label-report."""

import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from label_report.analyzer import LabelAnalyzer
from label_report.config import DEFAULT_MAX_LABELS, DEFAULT_TIMEOUT, ReportOptions, build_options
from label_report.errors import InvalidRepository, LabelReportError, TransportFailure
from label_report.models import LabelAnalysis
from label_report.report import build_console_table

app = typer.Typer(
    name="label-report",
    help="Rank a GitHub repository's open issues by label",
    add_completion=False,
)

err_console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise typer.BadParameter(f"Unknown log level: {level}", param_hint="--log-level")
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _error_message(e: LabelReportError) -> str:
    if isinstance(e, InvalidRepository):
        return (
            f"❌ Repository '{e.repo}' not found or inaccessible. "
            "Check the owner/repo name and try again."
        )
    if isinstance(e, TransportFailure) and e.status_code is None:
        return f"❌ Could not reach GitHub ({e.context}): {e.detail}"
    return f"❌ {e}"


async def _run(options: ReportOptions, on_status: Callable[[str], None]) -> LabelAnalysis:
    analyzer = LabelAnalyzer(options, on_status=on_status)
    try:
        return await analyzer.run()
    finally:
        await analyzer.close()


@app.command()
def report(
    owner: str = typer.Argument(..., help="Repository owner (user or organization)"),
    repo: str = typer.Argument(..., help="Repository name"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the Markdown report to this file"
    ),
    max_labels: int = typer.Option(
        DEFAULT_MAX_LABELS, "--max-labels", "-n", help="Maximum labels to show"
    ),
    open_report: bool = typer.Option(
        False, "--open", help="Show the report in a terminal viewer when done"
    ),
    console_table: bool = typer.Option(False, "--table", help="Print a console table"),
    url_column: bool = typer.Option(
        False, "--url-column", help="Add an explicit open-issues URL column"
    ),
    include_prs: bool = typer.Option(
        False, "--include-prs", help="Count open pull requests as issues"
    ),
    timeout: float = typer.Option(
        DEFAULT_TIMEOUT, "--timeout", help="Per-request timeout in seconds"
    ),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Set logging level"),
) -> None:
    """Fetch open issues, group them by label and report the ranking."""
    load_dotenv()  # Load .env file (e.g. GITHUB_TOKEN)
    _configure_logging(log_level)

    def on_status(msg: str) -> None:
        err_console.print(f"[dim]{escape(msg)}[/dim]")

    try:
        options = build_options(
            owner=owner,
            repo=repo,
            output=output,
            max_labels=max_labels,
            open_report=open_report,
            console_table=console_table,
            show_url_column=url_column,
            include_pull_requests=include_prs,
            timeout=timeout,
        )
        result = asyncio.run(_run(options, on_status))
    except LabelReportError as e:
        err_console.print(_error_message(e), markup=False, soft_wrap=True)
        raise typer.Exit(1)

    if options.console_table:
        Console().print(
            build_console_table(
                result.stats,
                repo=result.repo,
                total_open_issues=result.total_open_issues,
                max_labels=options.max_labels,
                show_url_column=options.show_url_column,
            )
        )
    if not (options.console_table or options.open_report or options.output):
        typer.echo(result.markdown)

    err_console.print(
        f"[green]{result.total_labels} labels across {result.total_open_issues} "
        f"open issues in {result.elapsed_seconds:.2f}s[/green]"
    )
    if result.output_path is not None:
        err_console.print(f"Report written to {result.output_path}", markup=False)

    if options.open_report:
        from label_report.app import LabelReportApp

        LabelReportApp(result, options.max_labels).run()


def main() -> None:
    """Run the label-report command."""
    app()


if __name__ == "__main__":
    main()
