"""Resolve a chronological tag listing into descending release records.

The listing is what ``git for-each-ref --sort=creatordate`` prints: one tag
per line, oldest first, optionally followed by whitespace and a subject.
The head descriptor is what ``git describe --tags`` prints for the checked
out revision.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..errors import GrammarMismatch, MissingParentTag
from .descriptor import TagDescriptor, VersionKey, parse_descriptor

HEAD_DESCRIPTION = '- HEAD'

_LINE_SPLIT_RE = re.compile(r'\s+')
_NEWLINE_RE = re.compile(r'[\r\n]+')


@dataclass(frozen=True)
class TagRecord:
    tag: str
    title: str
    description: str
    version_key: VersionKey
    range: str
    is_head: bool = False
    conforms: bool = True

    @property
    def version(self) -> str:
        return str(self.version_key)


@dataclass(frozen=True)
class Resolution:
    head: TagDescriptor
    records: tuple[TagRecord, ...]
    warnings: tuple[str, ...] = ()

    def __iter__(self):
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __getitem__(self, index: int) -> TagRecord:
        return self.records[index]


@dataclass(frozen=True)
class _Candidate:
    tag: str
    description: str
    descriptor: TagDescriptor


def split_listing(listing_text: str) -> list[tuple[str, str]]:
    """Split listing text into ``(tag, description)`` pairs, skipping blank lines."""
    pairs: list[tuple[str, str]] = []
    for line in _NEWLINE_RE.split(listing_text):
        line = line.strip()
        if not line:
            continue
        parts = _LINE_SPLIT_RE.split(line, maxsplit=1)
        tag = parts[0]
        text = parts[1].strip() if len(parts) > 1 else ''
        pairs.append((tag, f'- {text}' if text else ''))
    return pairs


def _collect_candidates(listing_text: str, warnings: list[str]) -> list[_Candidate]:
    candidates: list[_Candidate] = []
    skipped: list[str] = []
    duplicated: list[str] = []
    seen: set[str] = set()
    for tag, description in split_listing(listing_text):
        descriptor = parse_descriptor(tag)
        if not descriptor.conforms:
            skipped.append(tag)
            continue
        if tag in seen:
            duplicated.append(tag)
            continue
        seen.add(tag)
        candidates.append(_Candidate(tag, description, descriptor))
    if skipped:
        warnings.append(
            'The following tags are not semantic and will be skipped: ' + ', '.join(skipped)
        )
    if duplicated:
        warnings.append(
            'The following tags are duplicated and only their first occurrence is kept: '
            + ', '.join(duplicated)
        )
    return candidates


def _with_ranges(candidates: list[_Candidate]) -> list[TagRecord]:
    records: list[TagRecord] = []
    previous: _Candidate | None = None
    for cand in candidates:
        # The oldest tag contains every commit up to its definition.
        rng = cand.tag if previous is None else f'{previous.tag}..{cand.tag}'
        records.append(
            TagRecord(
                tag=cand.tag,
                title=cand.tag,
                description=cand.description,
                version_key=cand.descriptor.version_key,
                range=rng,
            )
        )
        previous = cand
    return records


def _head_record(
    head: TagDescriptor,
    records: list[TagRecord],
    head_title: str | None,
) -> TagRecord:
    parent = head.base_tag
    if not any(r.tag == parent for r in records):
        raise MissingParentTag(head.raw, parent)
    return TagRecord(
        tag=head.raw,
        title=head_title or head.title,
        description=HEAD_DESCRIPTION,
        version_key=head.version_key,
        range=f'{parent}..{head.raw}',
        is_head=True,
    )


def resolve_history(
    listing_text: str,
    head_descriptor: str,
    head_title: str | None = None,
) -> Resolution:
    """Resolve ``listing_text`` against the current ``head_descriptor``.

    Returns a :class:`Resolution` whose records are sorted by version,
    newest first, with tags newer than HEAD removed. Non-semantic and
    duplicated tags are skipped and reported in ``Resolution.warnings``.

    Raises:
        GrammarMismatch: ``head_descriptor`` is not a semantic descriptor.
        MissingParentTag: HEAD is past a tag that is not in the listing.
    """
    head = parse_descriptor(head_descriptor)
    if not head.conforms:
        raise GrammarMismatch(head_descriptor)

    warnings: list[str] = []
    records = _with_ranges(_collect_candidates(listing_text, warnings))

    if not any(r.tag == head.raw for r in records):
        records.append(_head_record(head, records, head_title))

    head_key = head.version_key
    # Index in listing order breaks version ties: HEAD (appended last) first,
    # then later tags before earlier ones.
    ordered = sorted(
        ((idx, r) for idx, r in enumerate(records) if r.version_key <= head_key),
        key=lambda item: (item[1].version_key, item[0]),
        reverse=True,
    )
    return Resolution(
        head=head,
        records=tuple(r for _, r in ordered),
        warnings=tuple(warnings),
    )


__all__ = ['HEAD_DESCRIPTION', 'Resolution', 'TagRecord', 'resolve_history', 'split_listing']
