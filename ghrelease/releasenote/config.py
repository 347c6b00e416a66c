"""Release file models and loading."""

from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from ..errors import ConfigError
from ..git import Commit


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode='before')
    @classmethod
    def drop_null_values(cls, data: Any) -> Any:
        # An empty YAML key (``commitInclude:``) means the field's default.
        if isinstance(data, dict):
            data = {k: v for k, v in data.items() if v is not None}
        return data


class CommitMatcherConfig(_Model):
    """Include/exclude rule set evaluated against a commit."""

    parent_of_merge_commit: bool = False
    prefixes: List[str] = Field(default_factory=list)
    contains: List[str] = Field(default_factory=list)

    def empty(self) -> bool:
        """Return True when neither prefixes nor substrings are configured."""
        return len(self.prefixes) + len(self.contains) == 0

    def match(self, commit: Commit, merge_commit: Optional[Commit] = None) -> bool:
        """Check whether the commit satisfies this rule set.

        Args:
            commit: Commit to test
            merge_commit: Merge commit the commit was attributed to, if any

        Returns:
            True if the attributed merge commit matches (when
            ``parent_of_merge_commit`` is set), a prefix starts the subject,
            or a substring occurs in the body
        """
        if self.parent_of_merge_commit and merge_commit is not None:
            if self.match(merge_commit, None):
                return True
        if any(commit.subject.startswith(s) for s in self.prefixes):
            return True
        return any(s in commit.body for s in self.contains)


MATCHER_KEYS = ("parentOfMergeCommit", "parent_of_merge_commit", "prefixes", "contains")


class CommitCategoryConfig(_Model):
    """A release-note section and the rule set that selects its commits."""

    id: str = ""
    title: str = ""
    matcher: CommitMatcherConfig = Field(default_factory=CommitMatcherConfig)

    @model_validator(mode='before')
    @classmethod
    def fold_matcher_keys(cls, data: Any) -> Any:
        # Release files declare the rule keys inline next to id and title.
        if isinstance(data, dict) and 'matcher' not in data:
            data = dict(data)
            inline = {k: data.pop(k) for k in MATCHER_KEYS if k in data}
            data['matcher'] = inline
        return data


class ReleaseNoteGeneratorConfig(_Model):
    """Options controlling how the release note is rendered."""

    show_abbrev_hash: bool = False
    show_committer: bool = True
    use_release_note_block: bool = False
    commit_include: CommitMatcherConfig = Field(default_factory=CommitMatcherConfig)
    commit_exclude: CommitMatcherConfig = Field(default_factory=CommitMatcherConfig)


class ReleaseConfig(_Model):
    """Content of a release file."""

    tag: str = ""
    name: str = ""
    title: str = ""
    target_commitish: str = ""
    release_note: str = ""
    prerelease: bool = False

    commit_include: CommitMatcherConfig = Field(default_factory=CommitMatcherConfig)
    commit_exclude: CommitMatcherConfig = Field(default_factory=CommitMatcherConfig)

    commit_categories: List[CommitCategoryConfig] = Field(default_factory=list)
    release_note_generator: ReleaseNoteGeneratorConfig = Field(
        default_factory=ReleaseNoteGeneratorConfig
    )

    def validate_config(self) -> None:
        if not self.tag:
            raise ConfigError("tag must be specified")


def parse_release_config(data: Union[str, bytes]) -> ReleaseConfig:
    """Parse a YAML (or JSON) release file.

    Args:
        data: Raw file content

    Returns:
        Validated release configuration with category ids filled in

    Raises:
        ConfigError: undecodable content, wrong shape, or missing tag
    """
    try:
        raw = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid release file: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"invalid release file: expected a mapping, got {type(raw).__name__}")

    try:
        cfg = ReleaseConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"invalid release file: {e}") from e

    for i, category in enumerate(cfg.commit_categories):
        if not category.id:
            category.id = f"_category_{i}"

    cfg.validate_config()
    return cfg
