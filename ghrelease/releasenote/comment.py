"""Pull request comment showing the releases a merge would create."""

from typing import Sequence

from .models import ReleaseProposal


COMMENT_MARKER = "<!-- RELEASE -->"
BADGE = (
    "[![RELEASE](https://img.shields.io/static/v1?label=GitHub&message=RELEASE"
    "&color=success&style=flat)](https://docs.github.com/repositories/releasing-projects-on-github)"
)
NO_RELEASE_TITLE = (
    "This pull request does not touch any RELEASE files. "
    "It means no GitHub releases will be created once this pull request got merged.\n"
)
TITLE_FORMAT = "The following {count} GitHub releases will be created once this pull request got merged.\n"


def make_comment_body(proposals: Sequence[ReleaseProposal]) -> str:
    """Build the markdown comment listing each proposed release note."""
    parts = [f"{COMMENT_MARKER}\n{BADGE}\n\n"]

    if not proposals:
        parts.append(NO_RELEASE_TITLE)
        return "".join(parts)

    parts.append(TITLE_FORMAT.format(count=len(proposals)))
    for proposal in proposals:
        parts.append(f"\n{proposal.release_note}\n")

    return "".join(parts)
