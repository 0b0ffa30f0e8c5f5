"""Pull request source backed by a local git repository."""

from typing import List, Optional, Tuple

from git import Repo
from git.exc import BadName, GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from git.objects import Commit

from ..exceptions import SourceError
from ..models import CommitRecord, PullRequestInfo
from .base import PullRequestSource


class LocalGitSource(PullRequestSource):
    """Reads a pull request as the commits of ``head`` that ``base`` lacks.

    Git has no notion of an assignee, so it is supplied by the caller.

    Attributes:
        repo (Repo): The git repository to read from
        base (str): Revision the pull request targets
        head (str): Revision of the pull request
        assignee (Optional[str]): Login of the person assigned to merge
    """

    def __init__(self, repo_path: str, base: str = "main", head: str = "HEAD", assignee: Optional[str] = None):
        try:
            self.repo = Repo(repo_path)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise SourceError(f"Not a git repository: {repo_path}") from e
        self.base = base
        self.head = head
        self.assignee = assignee

    def _commit(self, rev: str) -> Commit:
        try:
            return self.repo.commit(rev)
        except (BadName, ValueError, GitCommandError) as e:
            raise SourceError(f"Unknown revision '{rev}'") from e

    def _merge_base(self) -> Commit:
        self._commit(self.base)
        try:
            bases = self.repo.merge_base(self.base, self.head)
        except GitCommandError as e:
            raise SourceError(f"Failed to find merge base of {self.base} and {self.head}: {e}") from e
        if not bases:
            raise SourceError(f"{self.base} and {self.head} have no common ancestor")
        return bases[0]

    async def get_commits(self) -> List[CommitRecord]:
        self._merge_base()
        try:
            commits = list(self.repo.iter_commits(f"{self.base}..{self.head}", reverse=True))
        except GitCommandError as e:
            raise SourceError(f"Failed to list commits of {self.base}..{self.head}: {e}") from e

        records = []
        for commit in commits:
            message = commit.message
            if isinstance(message, bytes):
                message = message.decode("utf-8", errors="replace")
            # git stores a trailing newline that hosting APIs don't report
            if message.endswith("\n"):
                message = message[:-1]
            records.append(CommitRecord(id=commit.hexsha, message=message))
        return records

    async def get_modified_files(self) -> List[str]:
        merge_base = self._merge_base()
        head = self._commit(self.head)
        return sorted(
            diff.b_path
            for diff in merge_base.diff(head)
            if diff.change_type == "M"
        )

    async def get_pull_request(self) -> PullRequestInfo:
        merge_base = self._merge_base()
        head = self._commit(self.head)
        try:
            numstat = self.repo.git.diff("--numstat", merge_base.hexsha, head.hexsha)
        except GitCommandError as e:
            raise SourceError(f"Failed to compute diff size: {e}") from e

        additions = deletions = 0
        for line in numstat.splitlines():
            parts = line.split("\t")
            if len(parts) < 3:
                continue
            # Binary files are reported as "-"
            if parts[0].isdigit():
                additions += int(parts[0])
            if parts[1].isdigit():
                deletions += int(parts[1])
        return PullRequestInfo(additions=additions, deletions=deletions, assignee=self.assignee)

    async def get_manifest_texts(self, path: str) -> Tuple[Optional[str], Optional[str]]:
        merge_base = self._merge_base()
        head = self._commit(self.head)
        return self._read_blob(merge_base, path), self._read_blob(head, path)

    async def aclose(self) -> None:
        self.repo.close()

    @staticmethod
    def _read_blob(commit: Commit, path: str) -> Optional[str]:
        try:
            blob = commit.tree / path
        except KeyError:
            return None
        return blob.data_stream.read().decode("utf-8", errors="replace")
