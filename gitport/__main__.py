"""Process entry point: serve the protocol on stdin/stdout."""

from __future__ import annotations

import logging
import sys

from gitport.config import load_settings
from gitport.logger import setup_logging
from gitport.protocol.framing import FramingError
from gitport.protocol.server import ServerContext, serve

logger = logging.getLogger(__name__)


def main() -> int:
    settings = load_settings()
    setup_logging(settings.log_level)
    logger.info("gitport sidecar starting (git=%s)", settings.git_binary)

    ctx = ServerContext(settings=settings)
    try:
        serve(ctx, sys.stdin.buffer, sys.stdout.buffer)
    except FramingError:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
