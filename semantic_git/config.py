from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

# Flask app.config key holding the Config used by the /repo routes
APP_CONFIG_KEY = 'semgit_config'


@dataclass(frozen=True)
class Config:
    # Repository
    repo_dir: str
    git_exe: str
    head_title: str | None

    # Logging
    log_file: str | None
    log_level: str
    api_log_file: str | None
    api_log_level: str


def load_config(env: Mapping[str, str] | None = None) -> Config:
    e = os.environ if env is None else env
    return Config(
        repo_dir=e.get('SEMGIT_REPO_DIR', '.'),
        git_exe=e.get('SEMGIT_GIT_EXE', 'git'),
        # An empty override means "use the computed head version".
        head_title=e.get('SEMGIT_HEAD_TITLE') or None,
        log_file=e.get('SEMGIT_LOG_FILE'),
        log_level=e.get('SEMGIT_LOG_LEVEL', 'INFO'),
        api_log_file=e.get('SEMGIT_API_LOG_FILE'),
        api_log_level=e.get('SEMGIT_API_LOG_LEVEL', 'INFO'),
    )
