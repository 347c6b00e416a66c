"""Selection of release files among changed paths."""

import re
from functools import lru_cache
from typing import Iterable, List, Sequence


@lru_cache(maxsize=64)
def compile_pattern(pattern: str) -> re.Pattern:
    """Translate a glob pattern into a regex anchored on the whole path.

    ``*`` and ``?`` never cross ``/``; ``**/`` matches any number of
    directories and a trailing ``**`` matches the rest of the path.
    """
    pattern = pattern.strip()
    if pattern.startswith("./"):
        pattern = pattern[2:]
    out = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
            continue
        if pattern.startswith("**", i):
            out.append(".*")
            i += 2
            continue
        if ch == "*":
            out.append("[^/]*")
        elif ch == "?":
            out.append("[^/]")
        else:
            out.append(re.escape(ch))
        i += 1
    return re.compile("".join(out) + r"\Z")


def match_release_files(changed_files: Iterable[str], patterns: Sequence[str]) -> List[str]:
    """Return the changed files matching any release file pattern, in input order.

    Args:
        changed_files: Paths reported by ``git diff --name-only``
        patterns: Release file names or glob patterns

    Returns:
        Matching paths
    """
    compiled = [compile_pattern(p) for p in patterns if p.strip()]
    return [f for f in changed_files if any(c.match(f) for c in compiled)]
