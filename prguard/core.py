"""Core functionality for prguard."""
import asyncio
from typing import List, Optional

from .checks import check_assignee, check_commits, check_lockfile, check_pr_size
from .commit_message import CommitMessageValidator
from .config import Config
from .dependencies import check_section, manifest_diff
from .models import ReportMessage, ReviewReport
from .observers import ReviewReporter
from .sources import PullRequestSource

class ReviewRunner:
    """Runs every review check against a pull request source."""

    def __init__(
        self,
        source: PullRequestSource,
        config: Optional[Config] = None,
        reporter: Optional[ReviewReporter] = None,
        validator: Optional[CommitMessageValidator] = None,
    ):
        self.source = source
        self.config = config or Config()
        self.reporter = reporter or ReviewReporter()
        self.validator = validator or CommitMessageValidator()

    async def _emit_all(self, messages: List[Optional[ReportMessage]]) -> None:
        for message in messages:
            if message is not None:
                await self.reporter.emit(message)

    async def check_commits(self) -> None:
        """Fail the review once per commit that breaks the message conventions."""
        commits = await self.source.get_commits()
        results = self.validator.validate_all(commits)
        await self._emit_all(check_commits(results))

    async def check_files(self) -> None:
        modified_files = await self.source.get_modified_files()
        await self._emit_all([
            check_lockfile(
                modified_files,
                manifest_file=self.config.manifest_file,
                lockfile=self.config.lockfile,
                hint=self.config.lockfile_hint,
            )
        ])

    async def check_pull_request(self) -> None:
        info = await self.source.get_pull_request()
        await self._emit_all(check_pr_size(info, self.config.big_pr_threshold))
        if self.config.require_assignee:
            await self._emit_all([check_assignee(info)])

    async def check_dependencies(self) -> None:
        """Report dependency changes, one concurrent task per manifest section."""
        before, after = await self.source.get_manifest_texts(self.config.manifest_file)
        diff = manifest_diff(before, after)
        if diff is None:
            return
        section_messages = await asyncio.gather(*(
            check_section(section, diff) for section in self.config.dependency_sections
        ))
        for messages in section_messages:
            await self._emit_all(messages)

    async def run(self) -> ReviewReport:
        """Run all checks and return the collected report."""
        await self.check_commits()
        await self.check_files()
        await self.check_pull_request()
        await self.check_dependencies()
        return await self.reporter.complete()
