"""Semantic version resolution from git tag history.

- Exposes the pure core via `semantic_git.versioning`.
- Provides `__version__` for packaging/diagnostics.

Usage examples:
    from semantic_git import describe, resolve_history
    resolution = resolve_history(listing, 'v1.0.2-6-g778787d')
"""

from __future__ import annotations

import importlib as _importlib
from typing import Any as _Any

from .errors import GitCommandError, GrammarMismatch, MissingParentTag, TagError
from .versioning import (
    Resolution,
    TagDescriptor,
    TagRecord,
    VersionKey,
    describe,
    parse_descriptor,
    resolve_history,
)

try:
    from importlib.metadata import PackageNotFoundError, version as _ver

    __version__ = _ver('semantic-git')
except PackageNotFoundError:  # editable/dev without installed metadata
    __version__ = '0.0.0'

__all__ = [
    '__version__',
    'GitCommandError',
    'GrammarMismatch',
    'MissingParentTag',
    'Resolution',
    'TagDescriptor',
    'TagError',
    'TagRecord',
    'VersionKey',
    'cli',
    'describe',
    'parse_descriptor',
    'resolve_history',
]


def __getattr__(name: str) -> _Any:  # PEP 562 lazy import of submodules
    if name == 'cli':
        return _importlib.import_module(f'.{name}', __name__)
    raise AttributeError(f'module {__name__!r} has no attribute {name!r}')
