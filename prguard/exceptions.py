"""Exceptions raised by prguard."""


class PRGuardError(Exception):
    """Base class for prguard errors."""


class SourceError(PRGuardError):
    """Pull request metadata could not be read from its source."""
