from __future__ import annotations

import logging
import time
from contextlib import suppress
from typing import Any

from flask import Flask, g, request

from ..config import APP_CONFIG_KEY, Config, load_config
from ..logging_setup import configure_logging


def _install_request_logging_hooks(app: Flask) -> None:
    log = logging.getLogger('api')

    @app.before_request
    def _start_timer() -> None:
        g.started = time.perf_counter()

    @app.after_request
    def _log_response(response):
        started = getattr(g, 'started', None)
        elapsed = (time.perf_counter() - started) * 1000.0 if started is not None else 0.0
        # 5xx here means git failed
        log.log(
            logging.WARNING if response.status_code >= 500 else logging.INFO,
            '%s %s -> %s (%.1fms)',
            request.method,
            request.full_path.rstrip('?'),
            response.status_code,
            elapsed,
        )
        return response


def _register_blueprints(app: Flask) -> None:
    from .routes_tags import bp as tags_bp

    app.register_blueprint(tags_bp)


def create_app(config: Any | None = None) -> Flask:
    """Create and configure the Flask API application.

    Features:
      - Stores the repository Config (from env unless one is passed in
        ``config['semgit_config']``) for the /repo routes.
      - Initializes API logging from that Config's ``api_log_level`` and
        ``api_log_file``.
      - Registers the tags blueprint providing the REST endpoints.
      - Logs one line per request with status and duration.

    Args:
        config: Optional dict with overrides for Flask app.config.

    Returns:
        A configured Flask application instance.
    """
    app = Flask(__name__)

    if isinstance(config, dict):
        with suppress(Exception):
            app.config.update(config)
    cfg = app.config.get(APP_CONFIG_KEY)
    if not isinstance(cfg, Config):
        cfg = load_config()
        app.config[APP_CONFIG_KEY] = cfg

    configure_logging(
        service='api',
        level_env='SEMGIT_API_LOG_LEVEL',
        file_env='SEMGIT_API_LOG_FILE',
        level=cfg.api_log_level,
        file=cfg.api_log_file,
    )

    _install_request_logging_hooks(app)
    _register_blueprints(app)

    return app
