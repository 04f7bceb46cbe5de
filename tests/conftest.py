"""Pytest configuration and fixtures."""

import pytest


def _issue(number: int, labels: tuple[str, ...] = (), pull_request: bool = False) -> dict:
    item = {
        "id": 1000 + number,
        "number": number,
        "title": f"Issue {number}",
        "state": "open",
        "html_url": f"https://github.com/owner/repo/issues/{number}",
        "labels": [
            {
                "name": name,
                "url": f"https://api.github.com/repos/owner/repo/labels/{name}",
            }
            for name in labels
        ],
    }
    if pull_request:
        item["pull_request"] = {"url": f"https://api.github.com/repos/owner/repo/pulls/{number}"}
    return item


@pytest.fixture
def issue_payload():
    """Factory for raw issue objects as returned by the issues endpoint."""
    return _issue


@pytest.fixture
def repo_info():
    return {
        "name": "repo",
        "full_name": "owner/repo",
        "html_url": "https://github.com/owner/repo",
        "private": False,
    }
