"""Data produced by the release note pipeline."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..git import Commit


class ReleaseCommit(Commit):
    """A commit selected for a release, with its note text and category."""

    release_note: str = ""
    # Empty string means uncategorized.
    category_name: str = ""


class ReleaseProposal(BaseModel):
    """Everything needed to create one GitHub release."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    tag: str
    name: str = ""
    title: str = ""
    target_commitish: str = ""
    release_note: str = ""
    prerelease: bool = False

    owner: str = ""
    repo: str = ""
    pre_tag: str = ""
    base_commit: str = ""
    head_commit: str = ""
    commits: List[ReleaseCommit] = Field(default_factory=list)

    def to_dict(self) -> dict:
        return self.model_dump(mode='json', by_alias=True)
