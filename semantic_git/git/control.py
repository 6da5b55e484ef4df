# ruff: noqa: E402
from __future__ import annotations

"""Git invocation helpers.

Only read-only git plumbing is run: ``describe`` for the current revision
and ``for-each-ref`` for the tag listing.
"""
import logging
import subprocess  # nosec B404  # fixed git subcommands only; shell is never used.
from collections.abc import Sequence

from ..errors import GitCommandError

logger = logging.getLogger(__name__)

ALLOWED_SUBCOMMANDS = frozenset({'describe', 'for-each-ref'})

# One "<tag> <subject>" line per tag, oldest first
TAG_LISTING_ARGS = (
    'for-each-ref',
    '--sort=creatordate',
    '--format=%(refname:short) %(contents:subject)',
    'refs/tags',
)
DESCRIBE_ARGS = ('describe', '--tags')


def run_git(args: Sequence[str], cwd: str | None = None, git_exe: str | None = None) -> str:
    """Run one allowed git subcommand and return its stripped stdout.

    Safety guarantees:
    - The subcommand is validated against an allowlist.
    - shell=False is always used (subprocess default when passing a list).

    Raises GitCommandError when git is missing or exits non-zero. Output on
    stderr alone is not a failure; git prints hints there.
    """
    sub = args[0] if args else ''
    if sub not in ALLOWED_SUBCOMMANDS:
        logger.debug('Disallowed git subcommand: %r', sub)
        raise ValueError(sub)
    argv = [git_exe or 'git', *args]
    logger.debug('Executing: %s (cwd=%s)', ' '.join(argv), cwd or '.')
    try:
        res = subprocess.run(  # noqa: S603  # nosec  # safe: allowlisted subcommand; no shell
            argv,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise GitCommandError(argv, None, str(exc)) from exc
    stderr = (res.stderr or '').strip()
    if res.returncode != 0:
        raise GitCommandError(argv, res.returncode, stderr)
    if stderr:
        logger.warning('git %s: %s', sub, stderr)
    out = (res.stdout or '').strip()
    logger.debug('git %s output: %s', sub, out)
    return out


def describe_head(cwd: str | None = None, git_exe: str | None = None) -> str:
    return run_git(DESCRIBE_ARGS, cwd=cwd, git_exe=git_exe)


def list_tags(cwd: str | None = None, git_exe: str | None = None) -> str:
    return run_git(TAG_LISTING_ARGS, cwd=cwd, git_exe=git_exe)


__all__ = ['describe_head', 'list_tags', 'run_git']
