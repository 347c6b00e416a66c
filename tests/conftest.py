import os
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Dict

import pytest

from ghrelease.config.settings import ACTIONS_ENV
from ghrelease.git import Commit


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the host's GitHub Actions and GHRELEASE_* variables out of tests."""
    for name in ACTIONS_ENV.values():
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("GHRELEASE_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_commit() -> Callable[..., Commit]:
    """Factory for in-memory commits."""

    def factory(hash: str, subject: str = "", body: str = "", parents=(), committer: str = "alice") -> Commit:
        return Commit(
            author=committer,
            committer=committer,
            created_at=1600000000,
            hash=hash,
            abbreviated_hash=hash[:7],
            subject=subject,
            body=body,
            parent_hashes=tuple(parents),
        )

    return factory


BASE_RELEASE = "tag: v0.1.0\n"

HEAD_RELEASE = """\
tag: v0.2.0
commitExclude:
  prefixes: ["chore: release"]
commitCategories:
  - id: merged
    title: Merged
    parentOfMergeCommit: true
    prefixes: ["Merge pull request"]
  - id: feat
    title: Features
    prefixes: ["feat:"]
releaseNoteGenerator:
  showCommitter: false
"""


class GitRepo:
    """A throwaway repository with deterministic commit dates."""

    def __init__(self, path: Path, home: Path):
        self.path = path
        self._tick = 0
        self._env = dict(os.environ)
        self._env.update({
            'HOME': str(home),
            'GIT_CONFIG_NOSYSTEM': '1',
            'GIT_AUTHOR_NAME': 'Alice',
            'GIT_AUTHOR_EMAIL': 'alice@example.com',
            'GIT_COMMITTER_NAME': 'Bob',
            'GIT_COMMITTER_EMAIL': 'bob@example.com',
        })

    def git(self, *args: str) -> str:
        self._tick += 1
        env = dict(self._env)
        env['GIT_AUTHOR_DATE'] = env['GIT_COMMITTER_DATE'] = f"2024-01-01T00:{self._tick // 60:02d}:{self._tick % 60:02d}+00:00"
        result = subprocess.run(
            ["git", *args], cwd=self.path, env=env,
            stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True, check=True,
        )
        return result.stdout.strip()

    def commit_file(self, name: str, content: str, message: str) -> str:
        (self.path / name).write_text(content, encoding="utf-8")
        self.git("add", name)
        self.git("commit", "-q", "-m", message)
        return self.git("rev-parse", "HEAD")


@pytest.fixture
def git_repo(tmp_path) -> Dict[str, object]:
    """Repository whose RELEASE file moves from v0.1.0 to v0.2.0.

    History (oldest first): initial (tagged v0.1.0), feat, a merged topic
    branch holding one fix, a cleanup, and the release bump.
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    path = tmp_path / "repo"
    path.mkdir()
    home = tmp_path / "home"
    home.mkdir()
    repo = GitRepo(path, home)
    repo.git("init", "-q")
    repo.git("symbolic-ref", "HEAD", "refs/heads/main")
    repo.git("config", "commit.gpgsign", "false")

    base = repo.commit_file("RELEASE", BASE_RELEASE, "chore: initial")
    repo.git("tag", "v0.1.0")
    feat = repo.commit_file("a.txt", "a\n", "feat: add X")

    repo.git("checkout", "-q", "-b", "topic")
    fix = repo.commit_file("b.txt", "b\n", "fix: bug Y\n\n**Release note**:\n```release-note\nFixed bug Y\n```")
    repo.git("checkout", "-q", "main")
    repo.git("merge", "-q", "--no-ff", "topic", "-m", "Merge pull request #1 from alice/topic")
    merge = repo.git("rev-parse", "HEAD")

    cleanup = repo.commit_file("c.txt", "c\n", "chore: cleanup")
    head = repo.commit_file("RELEASE", HEAD_RELEASE, "chore: release v0.2.0")

    return {
        'repo': repo,
        'path': path,
        'base': base,
        'feat': feat,
        'fix': fix,
        'merge': merge,
        'cleanup': cleanup,
        'head': head,
    }
