"""GitHub Actions event parsing."""

import json
from typing import Optional

from pydantic import BaseModel, ValidationError

from ..errors import EventError


EVENT_PUSH = "push"
EVENT_PULL_REQUEST = "pull_request"
EVENT_ISSUE_COMMENT = "issue_comment"

SUPPORTED_EVENTS = (EVENT_PUSH, EVENT_PULL_REQUEST, EVENT_ISSUE_COMMENT)


class GitHubEvent(BaseModel):
    """Revisions and repository a workflow run is about."""

    name: str
    owner: str = ""
    repo: str = ""
    head_commit: str = ""
    base_commit: str = ""
    pr_number: int = 0
    is_comment: bool = False
    comment_url: str = ""

    @property
    def supported(self) -> bool:
        return self.name in SUPPORTED_EVENTS


def parse_github_event(event_name: Optional[str], event_path: Optional[str], client=None) -> GitHubEvent:
    """Build a GitHubEvent from the workflow's event name and payload file.

    Events other than push, pull_request and issue_comment carry only
    their name.

    Args:
        event_name: Value of GITHUB_EVENT_NAME
        event_path: Value of GITHUB_EVENT_PATH
        client: ``GitHubClient``, needed to resolve the pull request of an issue comment

    Returns:
        Parsed event

    Raises:
        EventError: payload missing, unreadable or not shaped as expected
    """
    event_name = event_name or ""
    if event_name not in SUPPORTED_EVENTS:
        return GitHubEvent(name=event_name)

    if not event_path:
        raise EventError("GITHUB_EVENT_PATH was not defined")
    try:
        with open(event_path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise EventError(f"failed to read event payload: {e}") from e

    try:
        owner = payload['repository']['owner']['login']
        repo = payload['repository']['name']

        if event_name == EVENT_PUSH:
            return GitHubEvent(
                name=EVENT_PUSH,
                owner=owner,
                repo=repo,
                head_commit=payload['after'],
                base_commit=payload['before'],
            )

        if event_name == EVENT_PULL_REQUEST:
            pr = payload['pull_request']
            return GitHubEvent(
                name=EVENT_PULL_REQUEST,
                owner=owner,
                repo=repo,
                head_commit=pr['head']['sha'],
                base_commit=pr['base']['sha'],
                pr_number=payload['number'],
            )

        pr_number = payload['issue']['number']
        comment_url = payload['comment']['html_url']
    except (KeyError, TypeError, ValidationError) as e:
        raise EventError(f"failed to parse {event_name} event payload: {e}") from e

    if client is None:
        raise EventError("a GitHub client is required to resolve issue comment events")
    pr = client.get_pull_request(owner, repo, pr_number)
    return GitHubEvent(
        name=EVENT_ISSUE_COMMENT,
        owner=owner,
        repo=repo,
        head_commit=pr['head']['sha'],
        base_commit=pr['base']['sha'],
        pr_number=pr_number,
        is_comment=True,
        comment_url=comment_url,
    )
