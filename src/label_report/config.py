"""Run configuration for label-report."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from label_report.errors import InvalidConfiguration

DEFAULT_MAX_LABELS = 25
DEFAULT_TIMEOUT = 30.0


class ReportOptions(BaseModel):
    """Options recognized by a report run."""

    owner: str
    repo: str
    output: Optional[Path] = None
    max_labels: int = Field(default=DEFAULT_MAX_LABELS, ge=1)
    open_report: bool = False
    console_table: bool = False
    show_url_column: bool = False
    include_pull_requests: bool = False
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    token: Optional[str] = None

    @field_validator("owner", "repo")
    @classmethod
    def _check_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        if "/" in value:
            raise ValueError("must not contain '/'")
        return value

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def repo_url(self) -> str:
        """Canonical web URL of the repository."""
        return f"https://github.com/{self.full_name}"


def build_options(**values: object) -> ReportOptions:
    """Validate ``values`` into ReportOptions, raising InvalidConfiguration."""
    try:
        return ReportOptions(**values)  # type: ignore[arg-type]
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidConfiguration(f"Invalid options: {problems}") from e
