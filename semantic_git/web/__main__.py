from __future__ import annotations

import os

from .app_factory import create_app


def main() -> None:  # pragma: no cover - dev helper
    """Serve the tags API for the repository in SEMGIT_REPO_DIR."""
    host = os.environ.get('SEMGIT_API_HOST', '127.0.0.1')
    port = int(os.environ.get('SEMGIT_API_PORT', '5000'))
    create_app().run(host=host, port=port)


if __name__ == '__main__':  # pragma: no cover - dev helper
    main()
