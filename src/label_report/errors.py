"""Errors raised by the label report pipeline."""

from typing import Optional


class LabelReportError(Exception):
    """Base class for every error that aborts a report run."""


class InvalidConfiguration(LabelReportError):
    """Options were rejected before any network activity."""


class InvalidRepository(LabelReportError):
    """The owner/repo pair does not resolve to an accessible repository."""

    def __init__(self, repo: str, reason: str = "") -> None:
        self.repo = repo
        self.reason = reason
        msg = f"Repository '{repo}' not found or inaccessible"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class TransportFailure(LabelReportError):
    """A request failed, timed out, or returned a non-success status."""

    def __init__(
        self, context: str, detail: str, status_code: Optional[int] = None
    ) -> None:
        self.context = context
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"{context} failed: {detail}")


class MalformedResponse(LabelReportError):
    """A response body does not have the expected issue/label structure."""

    def __init__(self, context: str, detail: str) -> None:
        self.context = context
        self.detail = detail
        super().__init__(f"{context} returned an unexpected payload: {detail}")
