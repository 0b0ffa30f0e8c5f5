"""Base class for pull request sources.

This module provides the abstract interface the review runner reads pull
request metadata through.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..models import CommitRecord, PullRequestInfo


class PullRequestSource(ABC):
    """Abstract base class for pull request metadata sources."""

    @abstractmethod
    async def get_commits(self) -> List[CommitRecord]:
        """Get the commits of the pull request, oldest first."""
        pass

    @abstractmethod
    async def get_modified_files(self) -> List[str]:
        """Get the paths of files modified (not added or deleted) by the pull request."""
        pass

    @abstractmethod
    async def get_pull_request(self) -> PullRequestInfo:
        """Get the size and assignee of the pull request."""
        pass

    @abstractmethod
    async def get_manifest_texts(self, path: str) -> Tuple[Optional[str], Optional[str]]:
        """Get a file's text before and after the pull request.

        Args:
            path: Path of the file relative to the repository root

        Returns:
            Tuple[Optional[str], Optional[str]]: The before and after text, with
            None for a side where the file does not exist
        """
        pass

    async def aclose(self) -> None:
        """Release any resources held by the source."""
        pass
