import logging
import os

from .constants import EditorConstants


def configure_logging(default_level: str = "WARNING"):
    level_name = os.getenv(EditorConstants.LOG_LEVEL_ENV, default_level).upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    logging.getLogger("asyncio").setLevel(logging.WARNING)
