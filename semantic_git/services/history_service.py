from __future__ import annotations

"""Resolve the tag history of a working copy.

Thin glue between the git helpers and the pure resolver: fetch the two
strings from git, resolve, and log whatever the resolver reports.
"""

import logging

from ..config import Config, load_config
from ..git.control import describe_head, list_tags
from ..versioning.descriptor import TagDescriptor, describe
from ..versioning.history import Resolution, resolve_history

logger = logging.getLogger(__name__)


def resolve_repository(
    config: Config | None = None,
    head: str | None = None,
    head_title: str | None = None,
) -> Resolution:
    """Resolve ``config.repo_dir``'s tags against its current head.

    ``head`` and ``head_title`` override what git reports and
    ``config.head_title`` respectively.
    """
    cfg = config or load_config()
    listing = list_tags(cwd=cfg.repo_dir, git_exe=cfg.git_exe)
    head_text = head or describe_head(cwd=cfg.repo_dir, git_exe=cfg.git_exe)
    logger.info('Resolving tag history of %s at %s', cfg.repo_dir, head_text)
    resolution = resolve_history(listing, head_text, head_title or cfg.head_title)
    log_warnings(resolution)
    logger.debug('Resolved %d tags for %s', len(resolution.records), head_text)
    return resolution


def describe_repository(config: Config | None = None) -> TagDescriptor:
    cfg = config or load_config()
    return describe(describe_head(cwd=cfg.repo_dir, git_exe=cfg.git_exe))


def log_warnings(resolution: Resolution) -> None:
    for message in resolution.warnings:
        logger.warning(message)


__all__ = ['describe_repository', 'log_warnings', 'resolve_repository']
