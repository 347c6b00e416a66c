"""GitHub REST client built on requests."""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from ..config import Config
from ..errors import GitHubAPIError


DEFAULT_TIMEOUT = 30


class GitHubClient:
    """Wrapper for the parts of the GitHub REST API used by ghrelease."""

    def __init__(self, config: Config, logger: Optional[logging.Logger] = None,
                 session: Optional[requests.Session] = None, timeout: int = DEFAULT_TIMEOUT):
        """Initialize GitHub client.

        Args:
            config: Configuration object containing the token and API URL
            logger: Logger instance
            session: Pre-built session, mostly useful in tests
            timeout: Per-request timeout in seconds
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.api_url = config.github_api_url
        self.timeout = timeout

        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/vnd.github+json',
            'X-GitHub-Api-Version': '2022-11-28',
        })
        if config.github_token:
            self.session.headers['Authorization'] = f"Bearer {config.github_token}"

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.api_url}{path}"
        self.logger.debug(f"{method} {url}")
        try:
            resp = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise GitHubAPIError(f"{method} {path} failed: {e}") from e

        if resp.status_code >= 400:
            raise GitHubAPIError(
                f"{method} {path} returned HTTP {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
            )
        return resp.json()

    def get_pull_request(self, owner: str, repo: str, number: int) -> Dict[str, Any]:
        """Get a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Pull request number

        Returns:
            Pull request JSON
        """
        return self._request("GET", f"/repos/{owner}/{repo}/pulls/{number}")

    def create_comment(self, owner: str, repo: str, number: int, body: str) -> Dict[str, Any]:
        """Post a comment on an issue or pull request.

        Returns:
            Created comment JSON
        """
        return self._request("POST", f"/repos/{owner}/{repo}/issues/{number}/comments", {'body': body})

    def get_release_by_tag(self, owner: str, repo: str, tag: str) -> Optional[Dict[str, Any]]:
        """Get the release for a tag, or None if there is none."""
        try:
            return self._request("GET", f"/repos/{owner}/{repo}/releases/tags/{quote(tag, safe='')}")
        except GitHubAPIError as e:
            if e.status_code == 404:
                return None
            raise

    def create_release(self, owner: str, repo: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a release.

        Args:
            owner: Repository owner
            repo: Repository name
            data: Release fields (tag_name, name, body, ...)

        Returns:
            Created release JSON
        """
        return self._request("POST", f"/repos/{owner}/{repo}/releases", data)

    def update_release(self, owner: str, repo: str, release_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        """Update an existing release."""
        return self._request("PATCH", f"/repos/{owner}/{repo}/releases/{release_id}", data)

    def upsert_release(self, owner: str, repo: str, proposal) -> Dict[str, Any]:
        """Create the release described by a proposal, or update it if the tag has one.

        Args:
            owner: Repository owner
            repo: Repository name
            proposal: ``ReleaseProposal`` to publish

        Returns:
            Release JSON
        """
        data = {
            'tag_name': proposal.tag,
            'name': proposal.title,
            'target_commitish': proposal.target_commitish,
            'body': proposal.release_note,
            'draft': False,
            'prerelease': proposal.prerelease,
        }

        current = self.get_release_by_tag(owner, repo, proposal.tag)
        if current:
            self.logger.info(f"Updating existing GitHub release for tag {proposal.tag}")
            return self.update_release(owner, repo, current['id'], data)

        self.logger.info(f"Creating new GitHub release for tag {proposal.tag}")
        return self.create_release(owner, repo, data)
