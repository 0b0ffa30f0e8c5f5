"""Pull request source backed by the GitHub REST API."""

from typing import Any, Dict, List, Optional, Tuple

import httpx

from ..exceptions import SourceError
from ..models import CommitRecord, PullRequestInfo
from .base import PullRequestSource

GITHUB_API_URL = "https://api.github.com"


class GitHubSource(PullRequestSource):
    """Reads a pull request from GitHub.

    Attributes:
        repository (str): Repository as ``owner/name``
        number (int): Pull request number
    """

    def __init__(
        self,
        repository: str,
        number: int,
        token: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = GITHUB_API_URL,
    ):
        if repository.count("/") != 1:
            raise SourceError(f"Repository must be given as owner/name, got '{repository}'")
        self.repository = repository
        self.number = number
        headers = {"Accept": "application/vnd.github+json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.client = client or httpx.AsyncClient(base_url=base_url, headers=headers, timeout=30.0)
        self._pull: Optional[Dict[str, Any]] = None

    async def _get(self, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self.client.get(url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SourceError(
                f"GitHub API error {e.response.status_code} for {e.request.url}"
            ) from e
        except httpx.HTTPError as e:
            raise SourceError(f"GitHub API request failed: {e}") from e
        return response

    async def _get_paginated(self, url: str) -> List[Dict[str, Any]]:
        items = []
        params: Optional[Dict[str, Any]] = {"per_page": 100}
        while url:
            response = await self._get(url, params=params)
            items.extend(response.json())
            url = response.links.get("next", {}).get("url")
            # The next link already carries the query string
            params = None
        return items

    async def _pull_request(self) -> Dict[str, Any]:
        if self._pull is None:
            response = await self._get(f"/repos/{self.repository}/pulls/{self.number}")
            self._pull = response.json()
        return self._pull

    async def get_commits(self) -> List[CommitRecord]:
        commits = await self._get_paginated(f"/repos/{self.repository}/pulls/{self.number}/commits")
        return [
            CommitRecord(id=item["sha"], message=item.get("commit", {}).get("message"))
            for item in commits
        ]

    async def get_modified_files(self) -> List[str]:
        files = await self._get_paginated(f"/repos/{self.repository}/pulls/{self.number}/files")
        return [item["filename"] for item in files if item.get("status") == "modified"]

    async def get_pull_request(self) -> PullRequestInfo:
        pull = await self._pull_request()
        assignee = pull.get("assignee") or None
        return PullRequestInfo(
            additions=pull.get("additions", 0),
            deletions=pull.get("deletions", 0),
            assignee=assignee["login"] if assignee else None,
        )

    async def get_manifest_texts(self, path: str) -> Tuple[Optional[str], Optional[str]]:
        pull = await self._pull_request()
        before = await self._get_contents(path, pull["base"]["sha"])
        after = await self._get_contents(path, pull["head"]["sha"])
        return before, after

    async def _get_contents(self, path: str, ref: str) -> Optional[str]:
        try:
            response = await self.client.get(
                f"/repos/{self.repository}/contents/{path}",
                params={"ref": ref},
                headers={"Accept": "application/vnd.github.raw+json"},
            )
        except httpx.HTTPError as e:
            raise SourceError(f"GitHub API request failed: {e}") from e
        if response.status_code == 404:
            return None
        if response.is_error:
            raise SourceError(f"GitHub API error {response.status_code} for {response.request.url}")
        return response.text

    async def aclose(self) -> None:
        await self.client.aclose()
