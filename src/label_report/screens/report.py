"""Report screen — ranked label table and the rendered Markdown report."""

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Label, Markdown, Static, TabbedContent, TabPane

from label_report.models import LabelAnalysis
from label_report.report import truncation_note


class ReportScreen(Screen):
    """Shows one LabelAnalysis as a table and as the rendered report."""

    CSS = """
    ReportScreen {
        layout: vertical;
    }
    #report-header {
        height: 3;
        background: $primary;
        color: $text;
        text-align: center;
        padding: 1 2;
        text-style: bold;
    }
    .section-title {
        text-style: bold;
        margin: 1 0;
        color: $secondary;
    }
    #labels-table {
        height: auto;
        margin: 1 0;
    }
    """

    BINDINGS = [
        ("q", "app.quit", "Quit"),
    ]

    def __init__(self, result: LabelAnalysis, max_labels: int, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.result = result
        self.max_labels = max_labels

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Static(
            f"  🏷  {self.result.repo}  ·  {self.result.total_open_issues} open issues  ·  "
            f"{self.result.total_labels} labels  ",
            id="report-header",
        )
        with TabbedContent("🏷 Labels", "📝 Report"):
            with TabPane("🏷 Labels"):
                yield from self._compose_labels()
            with TabPane("📝 Report"):
                with VerticalScroll():
                    yield Markdown(self.result.markdown, id="report-markdown")
        yield Footer()

    def _compose_labels(self) -> ComposeResult:
        r = self.result
        with VerticalScroll():
            yield Static("LABELS BY OPEN ISSUE COUNT", classes="section-title")
            if not r.stats:
                yield Markdown("> _No labelled open issues._")
                return

            shown = r.stats[: self.max_labels]
            if len(r.stats) > self.max_labels:
                yield Label(
                    truncation_note(len(shown), len(r.stats), self.max_labels),
                    id="truncation-note",
                )

            table = DataTable(id="labels-table")
            table.add_columns("#", "Label", "Open Issues", "Percentage")
            for rank, s in enumerate(shown, start=1):
                table.add_row(str(rank), s.name, str(s.count), s.display_percentage)
            yield table
