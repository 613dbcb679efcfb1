import logging
import os

LOG_FORMAT = "[%(asctime)s] %(name)s | %(levelname)s | %(message)s"


def configure_logging(level: str | None = None) -> None:
    level = level or os.environ.get("LOG_LEVEL", "INFO")
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
