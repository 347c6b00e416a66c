"""Git access module."""

from .client import GitClient
from .commit import Commit, parse_commit, parse_commits

__all__ = ["GitClient", "Commit", "parse_commit", "parse_commits"]
