"""Report pipeline.

Validates the repository, fetches its open issues, aggregates them by
label and renders the ranked result into a LabelAnalysis.
"""

import logging
import os
import time
from typing import Callable, Optional

from label_report.analysis.labels import build_label_stats
from label_report.config import ReportOptions
from label_report.fetcher import GitHubFetcher
from label_report.models import LabelAnalysis
from label_report.report import render_markdown, write_report

logger = logging.getLogger(__name__)


class LabelAnalyzer:
    """End-to-end label report for one repository."""

    def __init__(
        self,
        options: ReportOptions,
        on_status: Optional[Callable[[str], None]] = None,
        fetcher: Optional[GitHubFetcher] = None,
    ) -> None:
        self.options = options
        self.token = (
            options.token
            or os.environ.get("GITHUB_TOKEN")
            or os.environ.get("GH_TOKEN")
            or None
        )
        self._on_status = on_status or (lambda _: None)
        self._fetcher = fetcher or GitHubFetcher(
            token=self.token,
            timeout=options.timeout,
            include_pull_requests=options.include_pull_requests,
        )

    # ── Status helper ─────────────────────────────────────────────────────

    def _status(self, msg: str) -> None:
        self._on_status(msg)

    async def close(self) -> None:
        """Tear down resources."""
        await self._fetcher.close()

    # ── Full run ──────────────────────────────────────────────────────────

    async def run(self) -> LabelAnalysis:
        """Run the pipeline; nothing is written unless every step succeeds."""
        opts = self.options
        started = time.perf_counter()

        self._status(f"Checking repository {opts.full_name} …")
        info = await self._fetcher.validate_repository(opts.owner, opts.repo)
        repo_url = info.get("html_url") or opts.repo_url

        self._status("Fetching open issues …")
        issues = await self._fetcher.fetch_open_issues(opts.owner, opts.repo)

        self._status(f"Aggregating labels across {len(issues)} open issues …")
        stats = build_label_stats(issues, repo_url)

        markdown = render_markdown(
            stats,
            repo=opts.full_name,
            repo_url=repo_url,
            total_open_issues=len(issues),
            max_labels=opts.max_labels,
            show_url_column=opts.show_url_column,
        )

        output_path = None
        if opts.output is not None:
            self._status(f"Writing report to {opts.output} …")
            output_path = write_report(markdown, opts.output)

        elapsed = time.perf_counter() - started
        logger.info(
            "Report for %s: %d open issues, %d labels in %.2fs",
            opts.full_name, len(issues), len(stats), elapsed,
        )
        self._status("Done!")
        return LabelAnalysis(
            repo=opts.full_name,
            repo_url=repo_url,
            total_open_issues=len(issues),
            stats=stats,
            markdown=markdown,
            output_path=output_path,
            elapsed_seconds=elapsed,
        )
