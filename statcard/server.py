"""
Process entry point: ``statcard-server`` or ``python -m statcard.server``.

Reads a ``.env`` file when present, configures logging and serves the
card API on ``PORT`` (default 3000).
"""

from __future__ import annotations
import logging

from dotenv import load_dotenv

from . import config
from .web import create_app

log = logging.getLogger(__name__)


def main():
    load_dotenv()
    config.configure_logging()
    if config.github_token() is None:
        log.warning("GITHUB_TOKEN is not set; card requests will fail with 503")
    app = create_app()
    port = config.port()
    log.info("Listening on 0.0.0.0:%s", port)
    app.run(host="0.0.0.0", port=port, threaded=True)


if __name__ == "__main__":
    main()
