"""Tests for the Textual report viewer."""

import pytest
from textual.widgets import DataTable, Markdown

from label_report.app import LabelReportApp
from label_report.models import LabelAnalysis, LabelStat
from label_report.screens.report import ReportScreen


def _result(n_labels: int) -> LabelAnalysis:
    stats = [
        LabelStat(name=f"label-{i}", count=n_labels - i, percentage=10.0, url="u")
        for i in range(n_labels)
    ]
    return LabelAnalysis(
        repo="owner/repo",
        repo_url="https://github.com/owner/repo",
        total_open_issues=10,
        stats=stats,
        markdown="# Open Issues by Label: owner/repo",
    )


class TestLabelReportApp:
    @pytest.mark.asyncio
    async def test_shows_bounded_table(self):
        app = LabelReportApp(_result(5), max_labels=3)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert isinstance(app.screen, ReportScreen)
            table = app.screen.query_one("#labels-table", DataTable)
            assert table.row_count == 3
            assert len(app.screen.query("#truncation-note")) == 1

    @pytest.mark.asyncio
    async def test_renders_markdown_without_note(self):
        app = LabelReportApp(_result(2), max_labels=25)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.screen.query_one("#report-markdown", Markdown) is not None
            assert app.screen.query_one("#labels-table", DataTable).row_count == 2
            assert len(app.screen.query("#truncation-note")) == 0

    @pytest.mark.asyncio
    async def test_no_labels(self):
        app = LabelReportApp(_result(0), max_labels=25)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert len(app.screen.query("#labels-table")) == 0
