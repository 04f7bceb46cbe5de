"""Report rendering — Markdown document and console table."""

import logging
import os
import stat
import tempfile
from pathlib import Path

from rich.table import Table

from label_report.models import LabelStat

logger = logging.getLogger(__name__)

REPORT_TITLE = "Open Issues by Label"
SECTION_TITLE = "Labels by Open Issue Count"


def truncation_note(shown: int, total_labels: int, max_labels: int) -> str:
    return f"Showing the top {shown} of {total_labels} labels (maximum {max_labels})."


def _escape_cell(text: str) -> str:
    """Escape characters that would break a Markdown table cell or link."""
    for ch in ("\\", "|", "[", "]"):
        text = text.replace(ch, f"\\{ch}")
    return text


def render_markdown(
    stats: list[LabelStat],
    *,
    repo: str,
    repo_url: str,
    total_open_issues: int,
    max_labels: int,
    show_url_column: bool = False,
) -> str:
    """Render ranked label stats as a Markdown document.

    At most ``max_labels`` rows are emitted; when more labels exist a
    truncation note is added above the table. The result has no trailing
    newline.
    """
    shown = stats[:max_labels]
    lines = [
        f"# {REPORT_TITLE}: {repo}",
        "",
        f"Repository: [{repo}]({repo_url})",
        "",
        f"- Total open issues: {total_open_issues}",
        f"- Total labels: {len(stats)}",
        "",
        f"## {SECTION_TITLE}",
        "",
    ]
    if len(stats) > max_labels:
        lines += [f"> {truncation_note(len(shown), len(stats), max_labels)}", ""]

    if not shown:
        lines.append("_No labelled open issues._")
        return "\n".join(lines)

    header = ["Label", "Open Issues", "Percentage"]
    if show_url_column:
        header.append("Open Issues URL")
    lines.append("| " + " | ".join(header) + " |")
    lines.append("| " + " | ".join("---" for _ in header) + " |")
    for s in shown:
        row = [
            f"[{_escape_cell(s.name)}]({s.url})",
            str(s.count),
            s.display_percentage,
        ]
        if show_url_column:
            row.append(s.url)
        lines.append("| " + " | ".join(row) + " |")
    return "\n".join(lines)


def build_console_table(
    stats: list[LabelStat],
    *,
    repo: str,
    total_open_issues: int,
    max_labels: int,
    show_url_column: bool = False,
) -> Table:
    """Rich table with the same rows as the Markdown report."""
    shown = stats[:max_labels]
    table = Table(
        title=f"{REPORT_TITLE}: {repo} ({total_open_issues} open issues, {len(stats)} labels)"
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Label", style="cyan")
    table.add_column("Open Issues", style="green", justify="right")
    table.add_column("Percentage", style="yellow", justify="right")
    if show_url_column:
        table.add_column("Open Issues URL", style="dim")

    for rank, s in enumerate(shown, start=1):
        row = [str(rank), s.name, str(s.count), s.display_percentage]
        if show_url_column:
            row.append(s.url)
        table.add_row(*row)

    if len(stats) > max_labels:
        table.caption = truncation_note(len(shown), len(stats), max_labels)
    return table


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_report(markdown: str, path: Path) -> Path:
    """Write the report to ``path``, replacing any existing file atomically.

    An existing file keeps its permission bits; a new one gets the
    umask default.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(markdown)
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info("Wrote report to %s", path)
    return path
