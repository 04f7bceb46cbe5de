"""Textual viewer for a finished label report."""

from textual.app import App

from label_report.models import LabelAnalysis
from label_report.screens.report import ReportScreen


class LabelReportApp(App):
    """Displays a LabelAnalysis in the terminal."""

    TITLE = "Label Report"
    SUB_TITLE = "Open issues by label"

    CSS = """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, result: LabelAnalysis, max_labels: int, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.result = result
        self.max_labels = max_labels

    def on_mount(self) -> None:
        self.push_screen(ReportScreen(self.result, self.max_labels))
