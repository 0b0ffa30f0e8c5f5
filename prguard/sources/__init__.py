"""Pull request metadata sources.

A source supplies everything a review needs: the commits, the modified
files, the size and assignee of the pull request, and snapshots of the
dependency manifest before and after the change.

Example:
    ```python
    from prguard.sources import LocalGitSource

    source = LocalGitSource(".", base="main", head="HEAD")
    commits = await source.get_commits()
    ```
"""

from .base import PullRequestSource
from .git import LocalGitSource
from .github import GitHubSource

__all__ = [
    "PullRequestSource",
    "LocalGitSource",
    "GitHubSource",
]
