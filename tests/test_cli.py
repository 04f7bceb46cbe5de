"""Tests for the CLI entry point."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from label_report.cli import app
from label_report.errors import InvalidRepository, TransportFailure
from label_report.models import LabelAnalysis, LabelStat

runner = CliRunner()


def _result(**kwargs) -> LabelAnalysis:
    values = dict(
        repo="owner/repo",
        repo_url="https://github.com/owner/repo",
        total_open_issues=2,
        stats=[LabelStat(name="bug", count=2, percentage=100.0, url="https://example.test/bug")],
        markdown="# Open Issues by Label: owner/repo",
        elapsed_seconds=0.5,
    )
    values.update(kwargs)
    return LabelAnalysis(**values)


@pytest.fixture
def mock_analyzer():
    instance = MagicMock()
    instance.run = AsyncMock(return_value=_result())
    instance.close = AsyncMock()
    with patch("label_report.cli.LabelAnalyzer", return_value=instance) as mock_cls:
        with patch("label_report.cli.load_dotenv") as mock_ld:
            mock_cls.instance = instance
            mock_cls.load_dotenv = mock_ld
            yield mock_cls


class TestCli:
    def test_prints_markdown_by_default(self, mock_analyzer):
        result = runner.invoke(app, ["owner", "repo"])
        assert result.exit_code == 0, result.output
        assert "# Open Issues by Label: owner/repo" in result.stdout
        mock_analyzer.load_dotenv.assert_called_once()
        mock_analyzer.instance.close.assert_awaited_once()

    def test_passes_options(self, mock_analyzer, tmp_path):
        target = tmp_path / "labels.md"
        mock_analyzer.instance.run.return_value = _result(output_path=target)
        result = runner.invoke(
            app,
            ["owner", "repo", "-o", str(target), "-n", "10", "--url-column", "--include-prs"],
        )
        assert result.exit_code == 0, result.output
        options = mock_analyzer.call_args[0][0]
        assert options.output == Path(target)
        assert options.max_labels == 10
        assert options.show_url_column is True
        assert options.include_pull_requests is True
        assert "# Open Issues" not in result.stdout

    def test_console_table(self, mock_analyzer):
        result = runner.invoke(app, ["owner", "repo", "--table"])
        assert result.exit_code == 0, result.output
        assert "bug" in result.stdout
        assert "100.00%" in result.stdout
        assert "# Open Issues" not in result.stdout

    def test_open_launches_viewer(self, mock_analyzer):
        with patch("label_report.app.LabelReportApp") as mock_app_cls:
            result = runner.invoke(app, ["owner", "repo", "--open"])
        assert result.exit_code == 0, result.output
        mock_app_cls.assert_called_once()
        mock_app_cls.return_value.run.assert_called_once()

    def test_invalid_configuration_exits_before_run(self, mock_analyzer):
        result = runner.invoke(app, ["owner", "repo", "--max-labels", "0"])
        assert result.exit_code == 1
        assert "max_labels" in result.output
        mock_analyzer.assert_not_called()

    def test_invalid_repository(self, mock_analyzer):
        mock_analyzer.instance.run.side_effect = InvalidRepository("owner/repo", "HTTP 404")
        result = runner.invoke(app, ["owner", "repo"])
        assert result.exit_code == 1
        assert "'owner/repo' not found" in result.output
        mock_analyzer.instance.close.assert_awaited_once()

    def test_transport_failure(self, mock_analyzer):
        mock_analyzer.instance.run.side_effect = TransportFailure(
            "issues page 2 of owner/repo", "request timed out after 30.0s"
        )
        result = runner.invoke(app, ["owner", "repo"])
        assert result.exit_code == 1
        assert "Could not reach GitHub" in result.output
        assert "issues page 2" in result.output

    def test_unknown_log_level(self, mock_analyzer):
        result = runner.invoke(app, ["owner", "repo", "--log-level", "chatty"])
        assert result.exit_code == 2

    def test_main_callable(self):
        from label_report.cli import main
        assert callable(main)
