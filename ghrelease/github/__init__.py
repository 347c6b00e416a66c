"""GitHub integration module."""

from .client import GitHubClient
from .event import (
    EVENT_ISSUE_COMMENT,
    EVENT_PULL_REQUEST,
    EVENT_PUSH,
    GitHubEvent,
    parse_github_event,
)

__all__ = [
    "GitHubClient",
    "GitHubEvent",
    "parse_github_event",
    "EVENT_PUSH",
    "EVENT_PULL_REQUEST",
    "EVENT_ISSUE_COMMENT",
]
