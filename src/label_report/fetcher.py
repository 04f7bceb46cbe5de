"""GitHub data fetching via REST API."""

import logging
from typing import AsyncIterator, Optional

import httpx
from pydantic import ValidationError

from label_report.config import DEFAULT_TIMEOUT
from label_report.errors import InvalidRepository, MalformedResponse, TransportFailure
from label_report.models import Issue, Label

logger = logging.getLogger(__name__)

# Statuses meaning "this repository does not exist for this caller".
_MISSING_REPO_STATUSES = {403, 404, 451}


class GitHubFetcher:
    """Validates a repository and fetches its open issues from the GitHub REST API."""

    def __init__(
        self,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        per_page: int = 100,
        include_pull_requests: bool = False,
    ) -> None:
        self.token = token
        self.base_url = "https://api.github.com"
        self.timeout = timeout
        self.per_page = per_page
        self.include_pull_requests = include_pull_requests
        self._client: Optional[httpx.AsyncClient] = None

    # ── HTTP plumbing ─────────────────────────────────────────────────────

    @property
    def headers(self) -> dict[str, str]:
        h: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=self.timeout,
            )
        return self._client

    async def _get(self, url: str, context: str, **kwargs) -> httpx.Response:  # type: ignore[no-untyped-def]
        """GET that turns transport errors and rate limiting into TransportFailure."""
        client = await self._client_instance()
        logger.debug("GET %s (%s)", url, context)
        try:
            resp = await client.get(url, **kwargs)
        except httpx.TimeoutException as e:
            raise TransportFailure(
                context, f"request timed out after {self.timeout}s"
            ) from e
        except httpx.TransportError as e:
            raise TransportFailure(
                context, f"could not connect to GitHub ({e})"
            ) from e
        if resp.status_code == 403 and "rate limit" in resp.text.lower():
            remaining = resp.headers.get("x-ratelimit-remaining", "0")
            if self.token:
                hint = (
                    f"Authenticated rate limit hit (remaining: {remaining}). "
                    "Wait a few minutes and retry."
                )
            else:
                hint = (
                    "Unauthenticated rate limit hit (60 req/hour). "
                    "Set GITHUB_TOKEN to get 5 000 req/hour."
                )
            raise TransportFailure(
                context,
                f"GitHub API rate limit exceeded. {hint}",
                status_code=resp.status_code,
            )
        return resp

    @staticmethod
    def _decode(resp: httpx.Response, context: str) -> object:
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedResponse(context, f"body is not JSON ({e})") from e

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Repository ────────────────────────────────────────────────────────

    async def validate_repository(self, owner: str, repo: str) -> dict:
        """Confirm the repository is reachable and return its metadata."""
        full_name = f"{owner}/{repo}"
        context = f"repository check for {full_name}"
        resp = await self._get(f"/repos/{owner}/{repo}", context)
        if resp.status_code in _MISSING_REPO_STATUSES:
            raise InvalidRepository(full_name, f"HTTP {resp.status_code}")
        if not resp.is_success:
            raise TransportFailure(
                context,
                f"HTTP {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
            )
        info = self._decode(resp, context)
        if not isinstance(info, dict):
            raise MalformedResponse(context, "expected a repository object")
        return info

    # ── Issues ────────────────────────────────────────────────────────────

    async def iter_issue_pages(
        self, owner: str, repo: str
    ) -> AsyncIterator[tuple[int, list[dict]]]:
        """Yield ``(page_number, items)`` for every page of open issues.

        The first request carries the query parameters; every following
        request uses the ``next`` URL from the previous response's Link header.
        """
        url: Optional[str] = f"/repos/{owner}/{repo}/issues"
        params: Optional[dict[str, str]] = {
            "state": "open",
            "per_page": str(self.per_page),
        }
        page = 1
        visited: set[str] = set()
        while url:
            context = f"issues page {page} of {owner}/{repo}"
            resp = await self._get(url, context, params=params)
            if not resp.is_success:
                raise TransportFailure(
                    context,
                    f"HTTP {resp.status_code} {resp.reason_phrase}",
                    status_code=resp.status_code,
                )
            data = self._decode(resp, context)
            if not isinstance(data, list):
                raise MalformedResponse(context, "expected a JSON array of issues")
            logger.debug("%s: %d items", context, len(data))
            yield page, data

            visited.add(str(resp.request.url))
            next_link = resp.links.get("next")
            url = next_link.get("url") if next_link else None
            if url:
                self._check_next_url(url, visited, context)
            params = None  # the next link already carries the query
            page += 1

    def _check_next_url(self, url: str, visited: set[str], context: str) -> None:
        """Reject next links that leave the API host or revisit a page."""
        next_url = httpx.URL(url)
        if next_url.host != httpx.URL(self.base_url).host:
            raise MalformedResponse(
                context, f"next link points outside {self.base_url}: {url}"
            )
        if str(next_url) in visited:
            raise MalformedResponse(context, f"next link repeats a fetched page: {url}")

    async def fetch_open_issues(self, owner: str, repo: str) -> list[Issue]:
        """Fetch every open issue of the repository, following pagination."""
        issues: list[Issue] = []
        async for page, items in self.iter_issue_pages(owner, repo):
            for item in items:
                if not isinstance(item, dict):
                    raise MalformedResponse(
                        f"issues page {page} of {owner}/{repo}",
                        "expected an issue object",
                    )
                if "pull_request" in item and not self.include_pull_requests:
                    continue
                issues.append(self._parse_issue(item, page, f"{owner}/{repo}"))
        logger.info("Fetched %d open issues from %s/%s", len(issues), owner, repo)
        return issues

    @staticmethod
    def _parse_issue(item: dict, page: int, full_name: str) -> Issue:
        try:
            return Issue(
                number=item["number"],
                title=item["title"],
                url=item["html_url"],
                labels=[
                    Label(name=l["name"], url=l.get("url") or "")
                    for l in item.get("labels") or []
                ],
            )
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            raise MalformedResponse(
                f"issues page {page} of {full_name}",
                f"issue {item.get('number', '?')} is missing or has invalid fields ({e})",
            ) from e
