"""Commit message validation using Chain of Responsibility pattern.

Convention: <header><blank line><body><blank line><footer>
where <header> = <type>(<scope>): <subject> or <type>: <subject>
"""
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..models import CommitType

HEADER_PATTERN = re.compile(
    r"^(" + "|".join(t.value for t in CommitType) + r")(\(.+\))?: (.+)"
)
BODY_TEXT_PATTERN = re.compile(r"\w")
FOOTER_TEXT_PATTERN = re.compile(r"[^\W_]")

class ValidationHandler(ABC):
    """Abstract base class for validation handlers."""

    def __init__(self, next_handler: Optional['ValidationHandler'] = None):
        self.next_handler = next_handler

    def handle(self, message: Optional[str]) -> Tuple[bool, str]:
        """Handle validation and pass to next handler if valid."""
        result = self.validate(message)
        if not result[0] or not self.next_handler:
            return result
        return self.next_handler.handle(message)

    @abstractmethod
    def validate(self, message: Optional[str]) -> Tuple[bool, str]:
        """Validate the commit message."""
        pass

class LineHandler(ValidationHandler):
    """Checks a single line, only when the message is long enough to have it."""

    line_index = 0

    def validate(self, message: Optional[str]) -> Tuple[bool, str]:
        lines = message.split('\n')
        if len(lines) <= self.line_index:
            return True, ""
        return self.validate_line(lines[self.line_index])

    @abstractmethod
    def validate_line(self, line: str) -> Tuple[bool, str]:
        pass

class EmptyMessageHandler(ValidationHandler):
    """Validates that there is a message at all."""

    def validate(self, message: Optional[str]) -> Tuple[bool, str]:
        if not message:
            return False, "no commit message"
        return True, ""

class HeaderFormatHandler(LineHandler):
    """Validates the `<type>(<scope>): <subject>` header."""

    line_index = 0

    def validate_line(self, line: str) -> Tuple[bool, str]:
        if not HEADER_PATTERN.match(line):
            return False, "line 1 should be `<type>(<scope>): <subject>` or `<type>: <subject>`"
        return True, ""

class HeaderBlankLineHandler(LineHandler):
    """Validates blank line after the header."""

    line_index = 1

    def validate_line(self, line: str) -> Tuple[bool, str]:
        if line != '':
            return False, "line 2 should be blank"
        return True, ""

class BodyTextHandler(LineHandler):
    """Validates that the body is more than punctuation and whitespace."""

    line_index = 2

    def validate_line(self, line: str) -> Tuple[bool, str]:
        if not BODY_TEXT_PATTERN.search(line):
            return False, "line 3 should contain body text"
        return True, ""

class BodyBlankLineHandler(LineHandler):
    """Validates blank line between body and footer."""

    line_index = 3

    def validate_line(self, line: str) -> Tuple[bool, str]:
        if line != '':
            return False, "line 4 should be blank"
        return True, ""

class FooterTextHandler(LineHandler):
    """Validates that the footer has alphanumeric text."""

    line_index = 4

    def validate_line(self, line: str) -> Tuple[bool, str]:
        if not FOOTER_TEXT_PATTERN.search(line):
            return False, "footer should have text"
        return True, ""

def build_chain(handlers: List[ValidationHandler]) -> ValidationHandler:
    """Link handlers in order; the first one is the head of the chain."""
    for handler, next_handler in zip(handlers, handlers[1:]):
        handler.next_handler = next_handler
    return handlers[0]

def create_validation_chain() -> ValidationHandler:
    """Create the default validation chain."""
    return build_chain([
        EmptyMessageHandler(),
        HeaderFormatHandler(),
        HeaderBlankLineHandler(),
        BodyTextHandler(),
        BodyBlankLineHandler(),
        FooterTextHandler(),
    ])
