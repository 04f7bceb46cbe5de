"""Label aggregation — group open issues by label and rank the labels."""

from decimal import ROUND_HALF_UP, Decimal
from urllib.parse import urlencode

from label_report.models import Issue, LabelBucket, LabelledIssue, LabelStat

_TWO_PLACES = Decimal("0.01")


def group_by_label(issues: list[Issue]) -> LabelBucket:
    """File every issue under each of its (distinct) label names."""
    bucket = LabelBucket()
    for issue in issues:
        seen: set[str] = set()
        for label in issue.labels:
            if label.name in seen:
                continue
            seen.add(label.name)
            bucket.add(
                LabelledIssue(
                    issue_number=issue.number,
                    issue_title=issue.title,
                    issue_url=issue.url,
                    label_name=label.name,
                    label_url=label.url,
                )
            )
    return bucket


def compute_percentage(count: int, total: int) -> float:
    """Share of ``total`` as a percentage, rounded half-up to 2 places.

    Uses exact decimal arithmetic: 2469 of 20000 (12.345%) gives 12.35
    and 23 of 54 (42.5925...%) gives 42.59.
    """
    if total <= 0:
        raise ValueError(f"total must be positive, got {total}")
    ratio = Decimal(count * 100) / Decimal(total)
    return float(ratio.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def build_label_filter_url(repo_url: str, label_name: str) -> str:
    """URL of the repository's open issues filtered to one label.

    Names containing whitespace or double quotes are quoted, with inner
    quotes and backslashes backslash-escaped.
    """
    term = label_name
    if any(c.isspace() or c == '"' for c in label_name):
        escaped = label_name.replace("\\", "\\\\").replace('"', '\\"')
        term = f'"{escaped}"'
    query = urlencode({"q": f"is:open is:issue label:{term}"}, safe=":")
    return f"{repo_url.rstrip('/')}/issues?{query}"


def rank_label_stats(stats: list[LabelStat]) -> list[LabelStat]:
    """Sort by issue count descending; equal counts fall back to label name."""
    return sorted(stats, key=lambda s: (-s.count, s.name))


def build_label_stats(issues: list[Issue], repo_url: str) -> list[LabelStat]:
    """Ranked per-label statistics for a repository's open issues."""
    total = len(issues)
    if total == 0:
        return []

    bucket = group_by_label(issues)
    stats = [
        LabelStat(
            name=name,
            count=len(refs),
            percentage=compute_percentage(len(refs), total),
            url=build_label_filter_url(repo_url, name),
        )
        for name, refs in bucket.items()
    ]
    return rank_label_stats(stats)
