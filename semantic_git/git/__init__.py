"""Git integration utilities.

Stable import surface for the git process helpers.
"""

from .control import describe_head, list_tags, run_git

__all__ = ['describe_head', 'list_tags', 'run_git']
