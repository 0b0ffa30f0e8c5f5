"""Shared models for prguard."""
from typing import Any, List, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

class CommitType(str, Enum):
    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    BUILD = "build"
    CI = "ci"
    CHORE = "chore"
    REVERT = "revert"

class CommitRecord(BaseModel):
    """A commit of the pull request under review."""
    model_config = ConfigDict(frozen=True)

    id: str
    message: Optional[str] = None

class ValidationResult(BaseModel):
    """Outcome of validating one commit message.

    An invalid result is the single commit error kind: a commit message
    format violation, identified by the offending commit id and a reason.
    """
    model_config = ConfigDict(frozen=True)

    commit_id: str
    is_valid: bool
    reason: Optional[str] = None

    @classmethod
    def valid(cls, commit_id: str) -> 'ValidationResult':
        return cls(commit_id=commit_id, is_valid=True)

    @classmethod
    def invalid(cls, commit_id: str, reason: str) -> 'ValidationResult':
        return cls(commit_id=commit_id, is_valid=False, reason=reason)

    def describe(self) -> Optional[str]:
        """Render the text reported for an invalid commit."""
        if self.is_valid:
            return None
        if self.reason == "no commit message":
            return f"Commit {self.commit_id} has no commit message"
        return (
            f"Commit {self.commit_id} message does not comply with the "
            f"conventional-changelog-standard conventions: {self.reason}."
        )

class PullRequestInfo(BaseModel):
    additions: int = 0
    deletions: int = 0
    assignee: Optional[str] = None

    @property
    def size(self) -> int:
        return self.additions + self.deletions

class ReportLevel(str, Enum):
    FAIL = "fail"
    WARN = "warn"
    MESSAGE = "message"
    MARKDOWN = "markdown"

class ReportMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: ReportLevel
    text: str

class JSONDiffEntry(BaseModel):
    """Change of one top-level key between two JSON documents."""
    before: Any = None
    after: Any = None
    added: List[str] = Field(default_factory=list, description="Keys or items only present after")
    removed: List[str] = Field(default_factory=list, description="Keys or items only present before")

class ReviewReport(BaseModel):
    fails: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    messages: List[str] = Field(default_factory=list)
    markdowns: List[str] = Field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.fails)

    def add(self, message: ReportMessage) -> None:
        target = {
            ReportLevel.FAIL: self.fails,
            ReportLevel.WARN: self.warnings,
            ReportLevel.MESSAGE: self.messages,
            ReportLevel.MARKDOWN: self.markdowns,
        }[message.level]
        target.append(message.text)

    def render_markdown(self) -> str:
        """Render the report as a markdown comment body."""
        sections = []
        for title, icon, items in (
            ("Fails", ":no_entry_sign:", self.fails),
            ("Warnings", ":warning:", self.warnings),
            ("Messages", ":book:", self.messages),
        ):
            if not items:
                continue
            rows = "\n".join(f"| {icon} | {item} |" for item in items)
            sections.append(f"| | {len(items)} {title} |\n| --- | --- |\n{rows}")
        sections.extend(self.markdowns)
        return "\n\n".join(sections) + ("\n" if sections else "")
