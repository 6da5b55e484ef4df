"""Semantic tag grammar and tag history resolution.

Stable import surface for the pure, side-effect free core.
"""

from .descriptor import TagDescriptor, VersionKey, describe, parse_descriptor
from .history import Resolution, TagRecord, resolve_history

__all__ = [
    'Resolution',
    'TagDescriptor',
    'TagRecord',
    'VersionKey',
    'describe',
    'parse_descriptor',
    'resolve_history',
]
