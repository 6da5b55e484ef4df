"""Semantic tag descriptor parsing.

A descriptor is either a plain tag (``v1.0.2``, ``1.0.2-pre``) or the output
of ``git describe --tags`` for a revision past a tag (``1.0.2-6-g778787d``,
``v1.0.2-pre-6-g778787d``). Commits on top of the tag are added to the patch
number, so ``v1.0.2-6-g778787d`` describes version ``1.0.8``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple

from ..errors import GrammarMismatch

# The commit-count suffix is tried before the pre-release label, so
# "1.0.2-2-gfeee9ba" is never read as pre-release "-2-gfeee9ba".
DESCRIPTOR_RE = re.compile(
    r"""
    ^(?P<prefix>v)?
    (?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)
    (?:
        -(?P<commits>\d+)-g(?P<hash>[0-9a-z]+)
      |
        (?P<pre>-.+?)(?:-(?P<pre_commits>\d+)-g(?P<pre_hash>[0-9a-z]+))?
    )?\Z
    """,
    re.IGNORECASE | re.VERBOSE | re.ASCII,
)


class VersionKey(NamedTuple):
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f'{self.major}.{self.minor}.{self.patch}'


@dataclass(frozen=True)
class TagDescriptor:
    raw: str
    conforms: bool = False
    prefix: str = ''
    major: int = 0
    minor: int = 0
    declared_patch: int = 0
    commits_on_top: int = 0
    commit_hash: str | None = None
    pre_release: str | None = None
    # "-<commits>-g<hash>" exactly as it appeared in raw, '' when absent
    commit_suffix_text: str = ''

    @property
    def effective_patch(self) -> int:
        return self.declared_patch + self.commits_on_top

    @property
    def version_key(self) -> VersionKey:
        return VersionKey(self.major, self.minor, self.effective_patch)

    @property
    def version(self) -> str:
        return str(self.version_key)

    @property
    def title(self) -> str:
        return f'{self.prefix}{self.version}'

    @property
    def commit_suffix(self) -> str:
        """Short hash with a leading separator, or '' when HEAD is at the tag."""
        return f'-{self.commit_hash}' if self.commit_hash else ''

    @property
    def informational_version(self) -> str:
        """MAJOR.MINOR.PATCH-PRE-COMMIT, e.g. ``0.1.2-pre-8d07975``."""
        return f'{self.version}{self.pre_release or ""}{self.commit_suffix}'

    @property
    def base_tag(self) -> str:
        """The tag this descriptor counts commits from."""
        if not self.commit_suffix_text:
            return self.raw
        return self.raw[: -len(self.commit_suffix_text)]


def parse_descriptor(text: str) -> TagDescriptor:
    """Parse ``text`` into a :class:`TagDescriptor`.

    Never raises: when the text does not match the grammar, the returned
    descriptor has ``conforms=False`` and only ``raw`` populated.
    """
    m = DESCRIPTOR_RE.match(text)
    if not m:
        return TagDescriptor(raw=text)
    group = 'commits' if m.group('commits') is not None else 'pre_commits'
    commits = m.group(group)
    commit_hash = m.group('hash') or m.group('pre_hash')
    # the commit suffix always runs to the end of the text
    suffix = text[m.start(group) - 1 :] if commits is not None else ''
    commits_on_top = int(commits) if commits is not None else 0
    return TagDescriptor(
        raw=text,
        conforms=True,
        prefix=m.group('prefix') or '',
        major=int(m.group('major')),
        minor=int(m.group('minor')),
        declared_patch=int(m.group('patch')),
        commits_on_top=commits_on_top,
        commit_hash=commit_hash if commits_on_top > 0 else None,
        pre_release=m.group('pre'),
        commit_suffix_text=suffix,
    )


def describe(text: str) -> TagDescriptor:
    """Parse a single descriptor, raising :class:`GrammarMismatch` on failure."""
    descriptor = parse_descriptor(text)
    if not descriptor.conforms:
        raise GrammarMismatch(text)
    return descriptor


__all__ = ['DESCRIPTOR_RE', 'TagDescriptor', 'VersionKey', 'describe', 'parse_descriptor']
