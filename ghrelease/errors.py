"""Error types raised by ghrelease."""

from typing import Optional


class ReleaseError(Exception):
    """Base class for every failure that aborts a release run."""


class InvalidCommitLogError(ReleaseError):
    """Raised when a git log dump cannot be parsed into commits."""


class ConfigError(ReleaseError):
    """Raised when a release file or settings file is invalid."""


class GitCommandError(ReleaseError):
    """Raised when a git subprocess fails."""


class EventError(ReleaseError):
    """Raised when the GitHub event payload cannot be read."""


class GitHubAPIError(ReleaseError):
    """Raised when a GitHub REST call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
