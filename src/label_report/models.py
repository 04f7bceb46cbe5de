"""Data models for label-report."""

from pathlib import Path
from typing import Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field


# ── Raw GitHub data ───────────────────────────────────────────────────────

class Label(BaseModel):
    """A label attached to an issue."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str = ""


class Issue(BaseModel):
    """An open GitHub issue."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    url: str
    labels: list[Label] = Field(default_factory=list)


# ── Label aggregation ─────────────────────────────────────────────────────

class LabelledIssue(BaseModel):
    """One issue filed under one of its labels."""

    model_config = ConfigDict(frozen=True)

    issue_number: int
    issue_title: str
    issue_url: str
    label_name: str
    label_url: str = ""


class LabelBucket(BaseModel):
    """Issues grouped by exact label name."""

    buckets: dict[str, list[LabelledIssue]] = Field(default_factory=dict)

    def add(self, ref: LabelledIssue) -> None:
        """Append ``ref`` to its label's bucket, creating the bucket if needed."""
        bucket = self.buckets.get(ref.label_name)
        if bucket is None:
            bucket = self.buckets[ref.label_name] = []
        bucket.append(ref)

    def names(self) -> list[str]:
        return list(self.buckets)

    def issues(self, name: str) -> list[LabelledIssue]:
        return list(self.buckets.get(name, []))

    def count(self, name: str) -> int:
        return len(self.buckets.get(name, []))

    def items(self) -> Iterator[tuple[str, list[LabelledIssue]]]:
        return iter(self.buckets.items())

    def __len__(self) -> int:
        return len(self.buckets)

    def __contains__(self, name: object) -> bool:
        return name in self.buckets


class LabelStat(BaseModel):
    """Open-issue statistics for a single label."""

    model_config = ConfigDict(frozen=True)

    name: str
    count: int = Field(ge=1)
    percentage: float
    url: str

    @property
    def display_percentage(self) -> str:
        return f"{self.percentage:.2f}%"


# ── Pipeline result ───────────────────────────────────────────────────────

class LabelAnalysis(BaseModel):
    """Complete result of one report run."""

    repo: str
    repo_url: str
    total_open_issues: int = 0
    stats: list[LabelStat] = Field(default_factory=list)  # full ranking, never truncated
    markdown: str = ""
    output_path: Optional[Path] = None
    elapsed_seconds: float = 0.0

    @property
    def total_labels(self) -> int:
        return len(self.stats)
