"""Pull request checks that don't involve the dependency manifest."""
from typing import Dict, Iterable, List, Optional

from .models import PullRequestInfo, ReportLevel, ReportMessage, ValidationResult

BIG_PR_WARNING = ":exclamation: Big PR"
BIG_PR_MARKDOWN = (
    "> Pull Request size seems relatively large. If Pull Request contains multiple changes, "
    "split each into separate PR will helps faster, easier review."
)
ASSIGNEE_WARNING = (
    "Please assign someone to merge this PR, and optionally include people who should review."
)


def check_commits(results: Dict[str, ValidationResult]) -> List[ReportMessage]:
    """One failure per commit whose message breaks the conventions."""
    return [
        ReportMessage(level=ReportLevel.FAIL, text=result.describe())
        for result in results.values()
        if not result.is_valid
    ]


def check_lockfile(
    modified_files: Iterable[str],
    manifest_file: str = "package.json",
    lockfile: str = "yarn.lock",
    hint: str = "Perhaps you need to run `yarn install`?",
) -> Optional[ReportMessage]:
    """Warn when the manifest changed but its lockfile did not."""
    modified = set(modified_files)
    if manifest_file in modified and lockfile not in modified:
        return ReportMessage(
            level=ReportLevel.WARN,
            text=f"Changes were made to {manifest_file}, but not to {lockfile} - <i>{hint}</i>",
        )
    return None


def check_pr_size(info: PullRequestInfo, threshold: int = 600) -> List[ReportMessage]:
    if info.size > threshold:
        return [
            ReportMessage(level=ReportLevel.WARN, text=BIG_PR_WARNING),
            ReportMessage(level=ReportLevel.MARKDOWN, text=BIG_PR_MARKDOWN),
        ]
    return []


def check_assignee(info: PullRequestInfo) -> Optional[ReportMessage]:
    if info.assignee is None:
        return ReportMessage(level=ReportLevel.WARN, text=ASSIGNEE_WARNING)
    return None
