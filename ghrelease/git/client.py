"""Thin wrapper around the git executable."""

import logging
import subprocess
from typing import List, Optional

from ..errors import GitCommandError
from .commit import COMMIT_LOG_FORMAT, Commit, parse_commits


class GitClient:
    """Runs git commands against a local repository."""

    def __init__(self, git_path: str = "git", repo_dir: str = ".",
                 logger: Optional[logging.Logger] = None):
        """Initialize git client.

        Args:
            git_path: Path to the git executable
            repo_dir: Working directory of the repository
            logger: Logger instance
        """
        self.git_path = git_path
        self.repo_dir = repo_dir
        self.logger = logger or logging.getLogger(__name__)

    def _run(self, *args: str) -> str:
        cmd = [self.git_path, *args]
        self.logger.debug(f"Running {' '.join(cmd)} in {self.repo_dir}")
        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_dir,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding='utf-8',
                errors='replace',
                check=False,
            )
        except OSError as e:
            raise GitCommandError(f"failed to run {self.git_path}: {e}") from e

        if result.returncode != 0:
            raise GitCommandError(
                f"git {args[0]} exited with code {result.returncode}, out: {result.stdout}"
            )
        return result.stdout

    def list_commits(self, revision_range: str = "") -> List[Commit]:
        """List commits in the given revision range, newest first.

        Args:
            revision_range: Range such as ``v1.0.0...HEAD``; empty for all history

        Returns:
            Parsed commits
        """
        args = ["log", "--no-decorate", f"--pretty=format:{COMMIT_LOG_FORMAT}"]
        if revision_range:
            args.append(revision_range)
        return parse_commits(self._run(*args))

    def changed_files(self, from_commit: str, to_commit: str) -> List[str]:
        """List files touched between two commits.

        Args:
            from_commit: Base commit
            to_commit: Head commit

        Returns:
            Repository-relative file paths
        """
        out = self._run("diff", "--name-only", from_commit, to_commit)
        return [line for line in out.split("\n") if line]

    def read_file_at_commit(self, file_path: str, commit: str) -> str:
        """Read a file's content as of the given commit."""
        return self._run("show", f"{commit}:{file_path}").strip()
