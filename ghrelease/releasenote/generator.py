"""Release note generation logic."""

import re
import logging
from typing import Dict, List, Optional, Sequence

from ..git import Commit
from .config import (
    CommitCategoryConfig,
    CommitMatcherConfig,
    ReleaseConfig,
    parse_release_config,
)
from .models import ReleaseCommit, ReleaseProposal


COMMIT_URL_FORMAT = "https://github.com/{owner}/{repo}/commit/{hash}"

# A curated note inside a commit body, for example:
#
#   **Release note**:
#   <!-- Write your note here -->
#   ```release-note
#   Fixed the bug
#   ```
RELEASE_NOTE_BLOCK_RE = re.compile(
    r"(?:Release note(?:\*\*)?:\s*(?:<!--[^<>]*-->\s*)?```(?:release-note)?|```release-note)(.+?)```",
    re.DOTALL,
)


def attribute_merge_commits(commits: Sequence[Commit]) -> Dict[str, Commit]:
    """Map each commit merged in through a merge's second parent to that merge.

    For every merge commit the second-parent chain is walked back through
    single-parent commits until it reaches the first parent, leaves the
    loaded commits, or hits another merge (or a root commit). When merges
    overlap, the one listed first keeps the attribution.

    Args:
        commits: Commits of one revision range

    Returns:
        Mapping from commit hash to the merge commit it belongs to
    """
    hashes = {commit.hash: commit for commit in commits}

    merge_commits: Dict[str, Commit] = {}
    for commit in commits:
        if not commit.is_merge:
            continue
        finish, cursor = commit.parent_hashes[0], commit.parent_hashes[1]
        while True:
            parent = hashes.get(cursor)
            if parent is None or parent.hash == finish:
                break
            if len(parent.parent_hashes) != 1:
                break
            merge_commits.setdefault(cursor, commit)
            cursor = parent.parent_hashes[0]

    return merge_commits


def filter_commits(commits: Sequence[Commit],
                   include: CommitMatcherConfig,
                   exclude: CommitMatcherConfig,
                   merge_commits: Dict[str, Commit]) -> List[Commit]:
    """Apply an include/exclude pair, keeping the original order.

    An empty rule set imposes no constraint.
    """
    out = []
    for commit in commits:
        merge_commit = merge_commits.get(commit.hash)
        # Exclude was specified and matched.
        if not exclude.empty() and exclude.match(commit, merge_commit):
            continue
        # Include was specified and not matched.
        if not include.empty() and not include.match(commit, merge_commit):
            continue
        out.append(commit)
    return out


def determine_commit_release_note(commit: Commit, use_release_note_block: bool) -> str:
    """Pick the text shown for a commit in the release note.

    Args:
        commit: Commit to describe
        use_release_note_block: Look for a fenced release-note block in the body

    Returns:
        The trimmed block content, or the subject when disabled or not found
    """
    if not use_release_note_block:
        return commit.subject

    match = RELEASE_NOTE_BLOCK_RE.search(commit.body)
    if not match:
        return commit.subject
    return match.group(1).strip() or commit.subject


def determine_commit_category(commit: Commit,
                              merge_commit: Optional[Commit],
                              categories: Sequence[CommitCategoryConfig]) -> str:
    """Return the id of the first category claiming the commit.

    A category without rules claims every commit that reaches it.
    """
    for category in categories:
        if category.matcher.empty():
            return category.id
        if category.matcher.match(commit, merge_commit):
            return category.id
    return ""


def build_release_commits(commits: Sequence[Commit], cfg: ReleaseConfig) -> List[ReleaseCommit]:
    """Filter and classify the commits of a revision range.

    Args:
        commits: All commits in the range, newest first
        cfg: Release configuration at the head commit

    Returns:
        Surviving commits with release note and category attached
    """
    merge_commits = attribute_merge_commits(commits)
    selected = filter_commits(commits, cfg.commit_include, cfg.commit_exclude, merge_commits)

    use_block = cfg.release_note_generator.use_release_note_block
    return [
        ReleaseCommit(
            **commit.model_dump(),
            release_note=determine_commit_release_note(commit, use_block),
            category_name=determine_commit_category(
                commit, merge_commits.get(commit.hash), cfg.commit_categories
            ),
        )
        for commit in selected
    ]


def build_release_proposal(release_file: str, git, event) -> ReleaseProposal:
    """Build the release proposal for one changed release file.

    Args:
        release_file: Path of the release file inside the repository
        git: ``GitClient`` for the checked-out repository
        event: ``GitHubEvent`` providing owner, repo, base and head commits

    Returns:
        The release proposal

    Raises:
        ReleaseError: the release file or the commit range could not be loaded
    """
    logger = logging.getLogger(__name__)

    def load_config(commit: str) -> ReleaseConfig:
        return parse_release_config(git.read_file_at_commit(release_file, commit))

    base_cfg = load_config(event.base_commit)
    head_cfg = load_config(event.head_commit)
    logger.info(f"Loaded {release_file}: {base_cfg.tag} at base, {head_cfg.tag} at head")

    # All commits from the previous release until now.
    revisions = f"{base_cfg.tag}...{event.head_commit}"
    commits = git.list_commits(revisions)
    logger.debug(f"Found {len(commits)} commits in {revisions}")

    proposal = ReleaseProposal(
        tag=head_cfg.tag,
        name=head_cfg.name,
        title=head_cfg.title or f"Release {head_cfg.tag}",
        target_commitish=head_cfg.target_commitish or event.head_commit,
        release_note=head_cfg.release_note,
        prerelease=head_cfg.prerelease,
        owner=event.owner,
        repo=event.repo,
        pre_tag=base_cfg.tag,
        base_commit=event.base_commit,
        head_commit=event.head_commit,
        commits=build_release_commits(commits, head_cfg),
    )

    if not proposal.release_note:
        proposal.release_note = render_release_note(proposal, head_cfg)

    return proposal


def render_release_note(proposal: ReleaseProposal, cfg: ReleaseConfig) -> str:
    """Render the markdown release note for a proposal.

    Args:
        proposal: Proposal whose commits are rendered
        cfg: Release configuration supplying categories and generator options

    Returns:
        Markdown text
    """
    generator = cfg.release_note_generator
    lines = [f"## Release {proposal.tag} with changes since {proposal.pre_tag}\n\n"]

    def render_commit(c: ReleaseCommit) -> str:
        line = f"* {c.release_note}"
        if generator.show_abbrev_hash:
            url = COMMIT_URL_FORMAT.format(owner=proposal.owner, repo=proposal.repo, hash=c.hash)
            line += f" [{c.abbreviated_hash}]({url})"
        if generator.show_committer:
            line += f" - by {c.committer}"
        return line + "\n"

    merge_commits = attribute_merge_commits(proposal.commits)
    commits = filter_commits(
        proposal.commits, generator.commit_include, generator.commit_exclude, merge_commits
    )

    for category in cfg.commit_categories:
        matched = [c for c in commits if c.category_name == category.id]
        if not matched:
            continue
        lines.append(f"### {category.title}\n\n")
        lines.extend(render_commit(c) for c in matched)
        lines.append("\n")

    lines.extend(render_commit(c) for c in commits if c.category_name == "")

    return "".join(lines)
