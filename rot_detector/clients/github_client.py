"""GitHub REST client for repository health signals."""

import contextlib
import logging
import re
from datetime import datetime
from typing import Any

import httpx

from rot_detector.consts import GITHUB_API_URL, REQUEST_TIMEOUT_SECONDS, USER_AGENT
from rot_detector.models.model_package import RepositoryHealth

logger = logging.getLogger(__name__)

_GITHUB_URL = re.compile(r"github\.com[/:]([^/\s:]+)/([^/\s#?]+)")


def parse_github_url(url: str) -> tuple[str, str] | None:
    """Extract (owner, repo) from a GitHub URL.

    Accepts https, ssh and scp-style (git@github.com:owner/repo.git) URLs.
    Returns None for anything that is not a GitHub repository URL.
    """
    match = _GITHUB_URL.search(url or "")
    if not match:
        return None
    owner, repo = match.group(1), match.group(2)
    repo = re.sub(r"\.git$", "", repo)
    return owner, repo


class GitHubClient:
    """Fetches repository health from the GitHub REST API.

    fetch_repo_health never raises: an unresolvable URL, rate limiting,
    a missing repository or a network failure all yield None, which the
    scorer treats as "no supplemental signal".
    """

    BASE_URL = GITHUB_API_URL

    def __init__(
        self,
        token: str | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize GitHub client.

        Args:
            token: Personal access token. Unauthenticated calls are limited to 60/hour.
            timeout: Per-request timeout in seconds.
            client: Pre-built HTTP client (mainly for tests). Created lazily if None.
        """
        self.token = token
        self.timeout = timeout
        self._client = client
        self._rate_limit_warned = False

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                timeout=httpx.Timeout(self.timeout),
            )
        return self._client

    def _headers(self, token: str | None) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }
        token = token or self.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def fetch_repo_health(
        self, repository_url: str, token: str | None = None
    ) -> RepositoryHealth | None:
        """Fetch health signals for the repository behind a URL.

        Args:
            repository_url: Repository URL from registry metadata.
            token: Overrides the client's token for this call.

        Returns:
            RepositoryHealth, or None when no signal could be obtained.
        """
        parsed = parse_github_url(repository_url)
        if parsed is None:
            logger.debug(f"Not a GitHub repository URL: {repository_url}")
            return None

        owner, repo = parsed
        client = await self._get_client()
        headers = self._headers(token)

        try:
            response = await client.get(f"/repos/{owner}/{repo}", headers=headers)
            response.raise_for_status()
            repo_data = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status in (403, 429):
                if not self._rate_limit_warned:
                    logger.warning("GitHub API rate limit reached. Consider using --github-token")
                    self._rate_limit_warned = True
            elif status == 404:
                logger.debug(f"GitHub repository not found: {owner}/{repo}")
            else:
                logger.warning(f"GitHub API error ({status}) for {owner}/{repo}")
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Failed to fetch GitHub repository {owner}/{repo}: {e}")
            return None

        if not isinstance(repo_data, dict):
            return None

        last_commit_date = await self._fetch_last_commit_date(client, owner, repo, headers)
        contributor_count = await self._fetch_contributor_count(client, owner, repo, headers)

        return RepositoryHealth(
            last_commit_date=last_commit_date,
            contributor_count=contributor_count,
            open_issues=repo_data.get("open_issues_count") or 0,
            stars=repo_data.get("stargazers_count") or 0,
            is_archived=bool(repo_data.get("archived", False)),
        )

    async def _fetch_last_commit_date(
        self,
        client: httpx.AsyncClient,
        owner: str,
        repo: str,
        headers: dict[str, str],
    ) -> datetime | None:
        """Date of the latest commit on the default branch, None if not accessible."""
        try:
            response = await client.get(
                f"/repos/{owner}/{repo}/commits", headers=headers, params={"per_page": 1}
            )
            response.raise_for_status()
            commits: list[dict[str, Any]] = response.json()
            if not commits:
                return None
            date_str = commits[0]["commit"]["committer"]["date"]
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
            # Empty repositories answer 409
            logger.debug(f"Commits not accessible for {owner}/{repo}: {e}")
            return None

        with contextlib.suppress(ValueError, TypeError, AttributeError):
            return datetime.fromisoformat(date_str.replace("Z", "+00:00"))
        return None

    async def _fetch_contributor_count(
        self,
        client: httpx.AsyncClient,
        owner: str,
        repo: str,
        headers: dict[str, str],
    ) -> int:
        """Contributor count, read from the last-page link with per_page=1.

        Returns 0 when the contributors list is not accessible.
        """
        try:
            response = await client.get(
                f"/repos/{owner}/{repo}/contributors",
                headers=headers,
                params={"per_page": 1, "anon": "false"},
            )
            response.raise_for_status()

            last_url = response.links.get("last", {}).get("url")
            if last_url:
                page = httpx.URL(last_url).params.get("page")
                if page and page.isdigit():
                    return int(page)

            # No pagination (or 204 for empty repositories)
            if response.status_code == 204 or not response.content:
                return 0
            contributors = response.json()
            return len(contributors) if isinstance(contributors, list) else 0
        except (httpx.HTTPError, ValueError) as e:
            logger.debug(f"Contributors not accessible for {owner}/{repo}: {e}")
            return 0

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
