"""Commit message validation package."""

from .validation import (
    ValidationHandler,
    create_validation_chain,
)
from .validator import CommitMessageValidator

__all__ = [
    'ValidationHandler',
    'create_validation_chain',
    'CommitMessageValidator',
]
