from __future__ import annotations

"""Exception types raised by tag parsing, history resolution and git calls."""

from collections.abc import Sequence

EXPECTED_SHAPE = '[v]MAJOR.MINOR.PATCH[-PRERELEASE][-COMMITS-gHASH]'


class TagError(Exception):
    """Base class for every error this package raises."""


class GrammarMismatch(TagError, ValueError):
    """A descriptor does not match the semantic tag grammar."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(
            f"Tag '{text}' does not comply with semantic versioning. Must be {EXPECTED_SHAPE}."
        )


class MissingParentTag(TagError, LookupError):
    """HEAD has commits on top of a tag that is not in the listing."""

    def __init__(self, head: str, parent: str):
        self.head = head
        self.parent = parent
        super().__init__(f"Parent tag '{parent}' of head '{head}' was not found in the tag listing.")


class GitCommandError(TagError, RuntimeError):
    def __init__(self, argv: Sequence[str], returncode: int | None, stderr: str = ''):
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        detail = f': {stderr}' if stderr else ''
        super().__init__(f"'{' '.join(self.argv)}' failed (exit {returncode}){detail}")


__all__ = [
    'EXPECTED_SHAPE',
    'GitCommandError',
    'GrammarMismatch',
    'MissingParentTag',
    'TagError',
]
