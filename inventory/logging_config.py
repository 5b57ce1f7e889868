"""
Product Inventory API: Logging Configuration
============================================

What:  Configures the root logger for whichever transport is running.
When:  Once per Lambda invocation and once at HTTP app startup, before
       anything else logs.

Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
"""

import logging
import sys

from inventory.config import settings

NOISY_LOGGERS = (
    "boto3",
    "botocore",
    "urllib3",
    "sqlalchemy.engine",
    "aiosqlite",
    "uvicorn.access",
)


def setup_logging(level: str = "") -> None:
    """
    Configure the root logger to write to stdout (captured by CloudWatch
    and by Docker alike).

    Args:
        level: Level name; defaults to LOG_LEVEL from settings
    """
    logging.basicConfig(
        level=getattr(logging, level or settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
