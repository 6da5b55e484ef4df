from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s %(message)s'


def parse_level(raw: str | int | None, default: int = logging.INFO) -> int:
    """Turn a level name ("DEBUG") or number ("10", 10) into a logging level."""
    if raw is None or str(raw).strip() == '':
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        level = logging.getLevelName(str(raw).strip().upper())
        return level if isinstance(level, int) else default


def _set_handler_level_safely(handler: logging.Handler, level: int) -> None:
    try:
        handler.setLevel(level)
    except Exception:
        logging.debug('Could not set handler level', exc_info=True)


def _ensure_stderr_handler(root: logging.Logger, level: int) -> None:
    if any(type(h) is logging.StreamHandler for h in root.handlers):
        return
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter('[%(levelname)s] %(message)s'))
    root.addHandler(sh)


def configure_logging(
    service: str,
    level_env: str,
    file_env: str | None = None,
    default: str | int = 'INFO',
    level: str | int | None = None,
    stderr: bool = False,
    file: str | None = None,
) -> None:
    """Configure root logging for one entry point (cli or api).

    The level comes from ``level`` when given, else from ``level_env``, else
    ``default``. The log file is ``file`` when given, else the path named by
    ``file_env``; a rotating file handler (10 MiB x 5) is attached once per
    path. ``stderr`` adds a plain stream handler for command line use.
    """
    raw = level if level is not None else (os.environ.get(level_env) or str(default))
    lvl = parse_level(raw)
    root = logging.getLogger()
    root.setLevel(lvl)
    for h in list(root.handlers):
        _set_handler_level_safely(h, lvl)
    if stderr:
        _ensure_stderr_handler(root, lvl)
    path_s = file or (os.environ.get(file_env) if file_env else None)
    if path_s:
        try:
            p = Path(path_s)
            p.parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(str(p), maxBytes=10 * 1024 * 1024, backupCount=5)
            fh.setLevel(lvl)
            fh.setFormatter(logging.Formatter(LOG_FORMAT))
            if not any(
                isinstance(h, RotatingFileHandler)
                and getattr(h, 'baseFilename', '') == fh.baseFilename
                for h in root.handlers
            ):
                root.addHandler(fh)
            else:
                fh.close()
        except OSError:
            logging.warning('Could not set up file logging at %s', path_s, exc_info=True)
    logging.debug(
        '%s logging initialized (level=%s file=%s)',
        service,
        logging.getLevelName(lvl),
        path_s or 'none',
    )


__all__ = ['LOG_FORMAT', 'configure_logging', 'parse_level']
