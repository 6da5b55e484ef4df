#!/usr/bin/env python3
"""Command line entry point.

Usage:
  semantic-git describe [DESCRIPTOR] [--json]
  semantic-git tags [--listing-file FILE|-] [--head HEAD] [--head-title TITLE] [--json]

Without DESCRIPTOR/--head or --listing-file the values are read from git in
``--repo`` (default: SEMGIT_REPO_DIR or the current directory).

Exit codes:
  0 = success
  1 = descriptor or tag history could not be resolved
  2 = git failed
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import TextIO

from .config import Config, load_config
from .errors import GitCommandError, TagError
from .git.control import describe_head, list_tags
from .logging_setup import configure_logging
from .models.records import descriptor_to_dict, resolution_to_dict
from .services.history_service import log_warnings
from .versioning.descriptor import TagDescriptor, describe
from .versioning.history import Resolution, resolve_history

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_RESOLUTION = 1
EXIT_GIT = 2

DESCRIBE_KEYS = ('major', 'minor', 'patch', 'pre_release', 'commits', 'commit')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='semantic-git',
        description='Resolve semantic version tags from git history',
    )
    parser.add_argument(
        '--repo',
        type=str,
        help='Repository to run git in (default: SEMGIT_REPO_DIR or .)',
    )
    parser.add_argument(
        '--log-level',
        type=str,
        help='Logging level name or number (default: SEMGIT_LOG_LEVEL or INFO)',
    )
    sub = parser.add_subparsers(dest='command', required=True)

    p_describe = sub.add_parser('describe', help='Split one descriptor into its version parts')
    p_describe.add_argument(
        'descriptor',
        nargs='?',
        help="Tag or 'git describe --tags' output (default: the repository head)",
    )
    p_describe.add_argument('--json', action='store_true', help='Print JSON instead of KEY=VALUE')

    p_tags = sub.add_parser('tags', help='List semantic tags, newest first, with commit ranges')
    p_tags.add_argument(
        '--listing-file',
        type=str,
        help="File with one '<tag> <subject>' line per tag, oldest first ('-' for stdin)",
    )
    p_tags.add_argument('--head', type=str, help='Current head descriptor (default: git describe)')
    p_tags.add_argument(
        '--head-title',
        type=str,
        help='Title for an unreleased HEAD instead of the computed version',
    )
    p_tags.add_argument(
        '--json', action='store_true', help='Print JSON instead of tab separated lines'
    )
    return parser


def _read_listing(source: str, stdin: TextIO) -> str:
    if source == '-':
        return stdin.read()
    return Path(source).read_text(encoding='utf-8')


def _format_value(value: object) -> str:
    return '' if value is None else str(value)


def render_descriptor(desc: TagDescriptor, as_json: bool) -> str:
    data = descriptor_to_dict(desc)
    if as_json:
        return json.dumps(data, sort_keys=True)
    return '\n'.join(f'{key}={_format_value(data[key])}' for key in DESCRIBE_KEYS)


def render_resolution(resolution: Resolution, as_json: bool) -> str:
    if as_json:
        return json.dumps(resolution_to_dict(resolution), sort_keys=True)
    return '\n'.join(
        '\t'.join((r.title, r.tag, r.range, r.description)) for r in resolution.records
    )


def _cmd_describe(args: argparse.Namespace, cfg: Config) -> str:
    text = args.descriptor or describe_head(cwd=cfg.repo_dir, git_exe=cfg.git_exe)
    return render_descriptor(describe(text), args.json)


def _cmd_tags(args: argparse.Namespace, cfg: Config, stdin: TextIO) -> str:
    if args.listing_file:
        listing = _read_listing(args.listing_file, stdin)
    else:
        listing = list_tags(cwd=cfg.repo_dir, git_exe=cfg.git_exe)
    head = args.head or describe_head(cwd=cfg.repo_dir, git_exe=cfg.git_exe)
    resolution = resolve_history(listing, head, args.head_title or cfg.head_title)
    log_warnings(resolution)
    return render_resolution(resolution, args.json)


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_config()
    if args.repo:
        cfg = replace(cfg, repo_dir=args.repo)
    configure_logging(
        service='cli',
        level_env='SEMGIT_LOG_LEVEL',
        file_env='SEMGIT_LOG_FILE',
        default=cfg.log_level,
        level=args.log_level,
        stderr=True,
        file=cfg.log_file,
    )
    out = stdout or sys.stdout
    try:
        if args.command == 'describe':
            text = _cmd_describe(args, cfg)
        else:
            text = _cmd_tags(args, cfg, stdin or sys.stdin)
    except GitCommandError as exc:
        logger.error('%s', exc)
        return EXIT_GIT
    except TagError as exc:
        logger.error('%s', exc)
        return EXIT_RESOLUTION
    except (OSError, UnicodeDecodeError) as exc:
        logger.error('Could not read tag listing: %s', exc)
        return EXIT_RESOLUTION
    if text:
        out.write(text + '\n')
    return EXIT_OK


if __name__ == '__main__':
    raise SystemExit(main())
