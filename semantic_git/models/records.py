from __future__ import annotations

from typing import Any

from ..versioning.descriptor import TagDescriptor
from ..versioning.history import Resolution, TagRecord


def record_to_dict(record: TagRecord) -> dict[str, Any]:
    return {
        'tag': record.tag,
        'title': record.title,
        'description': record.description,
        'version': record.version,
        'version_key': list(record.version_key),
        'range': record.range,
        'is_head': bool(record.is_head),
        'conforms': bool(record.conforms),
    }


def descriptor_to_dict(descriptor: TagDescriptor) -> dict[str, Any]:
    # Patch is reported with commits on top already added
    return {
        'tag': descriptor.raw,
        'prefix': descriptor.prefix,
        'major': descriptor.major,
        'minor': descriptor.minor,
        'patch': descriptor.effective_patch,
        'declared_patch': descriptor.declared_patch,
        'commits': descriptor.commits_on_top,
        'commit': descriptor.commit_hash,
        'pre_release': descriptor.pre_release,
        'version': descriptor.version,
        'informational_version': descriptor.informational_version,
        'title': descriptor.title,
    }


def resolution_to_dict(resolution: Resolution) -> dict[str, Any]:
    return {
        'head': descriptor_to_dict(resolution.head),
        'tags': [record_to_dict(r) for r in resolution.records],
        'warnings': list(resolution.warnings),
    }


__all__ = ['descriptor_to_dict', 'record_to_dict', 'resolution_to_dict']
