"""Commit records parsed from ``git log`` output."""

import re
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..errors import InvalidCommitLogError


SEPARATOR = "__GIT_LOG_SEPARATOR__"
DELIMITER = "__GIT_LOG_DELIMITER__"

# author, committer, author date, hash, abbreviated hash, parents, subject, body
COMMIT_LOG_FIELDS = ["%an", "%cn", "%at", "%H", "%h", "%P", "%s", "%b"]
FIELD_NUM = len(COMMIT_LOG_FIELDS)
TIMESTAMP_RE = re.compile(r"[0-9]+")
COMMIT_LOG_FORMAT = SEPARATOR + DELIMITER.join(COMMIT_LOG_FIELDS)


class Commit(BaseModel):
    """A single commit as reported by git."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    author: str = ""
    committer: str = ""
    created_at: int = 0
    hash: str
    abbreviated_hash: str = ""
    subject: str = ""
    body: str = ""
    parent_hashes: Tuple[str, ...] = ()

    @property
    def is_merge(self) -> bool:
        return len(self.parent_hashes) > 1


def parse_commits(log: str) -> List[Commit]:
    """Parse a log dump produced with ``COMMIT_LOG_FORMAT``.

    Anything before the first separator is ignored.

    Args:
        log: Raw ``git log`` output

    Returns:
        Commits in log order
    """
    records = log.split(SEPARATOR)
    return [parse_commit(record) for record in records[1:]]


def parse_commit(record: str) -> Commit:
    """Parse one delimited commit record.

    Args:
        record: Text between two separators

    Returns:
        The parsed commit

    Raises:
        InvalidCommitLogError: wrong field count or non-numeric timestamp
    """
    fields = record.split(DELIMITER)
    if len(fields) != FIELD_NUM:
        raise InvalidCommitLogError(
            f"invalid log: log line should contain {FIELD_NUM} fields but got {len(fields)}"
        )

    if not TIMESTAMP_RE.fullmatch(fields[2]):
        raise InvalidCommitLogError(f"invalid log: bad commit timestamp {fields[2]!r}")
    created_at = int(fields[2])

    return Commit(
        author=fields[0],
        committer=fields[1],
        created_at=created_at,
        hash=fields[3],
        abbreviated_hash=fields[4],
        parent_hashes=tuple(fields[5].split()),
        subject=fields[6],
        body=fields[7].strip(),
    )
