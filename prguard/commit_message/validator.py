"""Commit message validation."""
from typing import Dict, Iterable, Optional

from ..models import CommitRecord, ValidationResult
from .validation import ValidationHandler, create_validation_chain

class CommitMessageValidator:
    """Validates commit messages against conventional-changelog conventions."""

    def __init__(self, validation_chain: Optional[ValidationHandler] = None):
        self.validation_chain = validation_chain or create_validation_chain()

    def validate(self, commit: CommitRecord) -> ValidationResult:
        """Validate one commit; only the first violation is reported."""
        is_valid, reason = self.validation_chain.handle(commit.message)
        if is_valid:
            return ValidationResult.valid(commit.id)
        return ValidationResult.invalid(commit.id, reason)

    def validate_all(self, commits: Iterable[CommitRecord]) -> Dict[str, ValidationResult]:
        """Validate every commit, keyed by commit id."""
        return {commit.id: self.validate(commit) for commit in commits}
