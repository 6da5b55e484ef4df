"""Shared pytest fixtures.

Tests that touch logging must not leak handlers or levels into the rest of
the suite; tests marked ``git`` build a throwaway repository with the real
git binary and are skipped when git is not installed.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from logging import Logger
from pathlib import Path

import pytest

LISTING = """1.0.0           Initial release of nothing.
1.0.1           New release test
1.0.2           Added simple task tests."""


@pytest.fixture(autouse=True)
def _restore_root_logger() -> None:
    root: Logger = logging.getLogger()
    old_level = root.level
    old_handlers = list(root.handlers)
    try:
        yield
    finally:
        root.setLevel(old_level)
        for h in list(root.handlers):
            if h not in old_handlers:
                root.removeHandler(h)
                h.close()
        for h in old_handlers:
            if h not in root.handlers:
                root.addHandler(h)


@pytest.fixture
def listing() -> str:
    return LISTING


class GitRepo:
    def __init__(self, path: Path):
        self.path = path
        self._day = 0

    def git(self, *args: str) -> str:
        self._day += 1
        stamp = f'2020-01-{self._day:02d}T12:00:00+0000'
        env = dict(
            os.environ,
            GIT_AUTHOR_NAME='Test',
            GIT_AUTHOR_EMAIL='test@example.com',
            GIT_COMMITTER_NAME='Test',
            GIT_COMMITTER_EMAIL='test@example.com',
            GIT_AUTHOR_DATE=stamp,
            GIT_COMMITTER_DATE=stamp,
        )
        res = subprocess.run(
            ['git', *args],
            cwd=self.path,
            env=env,
            check=True,
            capture_output=True,
            text=True,
        )
        return res.stdout.strip()

    def commit(self, subject: str) -> None:
        self.git('commit', '--allow-empty', '-q', '-m', subject)

    def tag(self, name: str) -> None:
        self.git('tag', name)


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepo:
    if shutil.which('git') is None:
        pytest.skip('git is not installed')
    repo = GitRepo(tmp_path)
    repo.git('init', '-q')
    return repo
