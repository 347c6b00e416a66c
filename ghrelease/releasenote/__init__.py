"""Release note generation module."""

from .comment import make_comment_body
from .config import (
    CommitCategoryConfig,
    CommitMatcherConfig,
    ReleaseConfig,
    ReleaseNoteGeneratorConfig,
    parse_release_config,
)
from .files import match_release_files
from .generator import (
    attribute_merge_commits,
    build_release_commits,
    build_release_proposal,
    determine_commit_category,
    determine_commit_release_note,
    filter_commits,
    render_release_note,
)
from .models import ReleaseCommit, ReleaseProposal

__all__ = [
    "CommitCategoryConfig",
    "CommitMatcherConfig",
    "ReleaseCommit",
    "ReleaseConfig",
    "ReleaseNoteGeneratorConfig",
    "ReleaseProposal",
    "attribute_merge_commits",
    "build_release_commits",
    "build_release_proposal",
    "determine_commit_category",
    "determine_commit_release_note",
    "filter_commits",
    "make_comment_body",
    "match_release_files",
    "parse_release_config",
    "render_release_note",
]
