"""Process-wide logging setup shared by the API and the CLI scripts."""

import logging

from portal.core.config import get_settings


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls are no-ops (basicConfig semantics)."""
    logging.basicConfig(
        level=getattr(logging, level or get_settings().LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
