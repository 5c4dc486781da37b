import sys

from loguru import logger

from top_podcasts.config import config

# Lines carry the thread name: request worker or delivery context.
_LOCAL_FORMAT = "{time:HH:mm:ss} <level>{level: <8}</level> [top-podcasts] <cyan>{thread.name: <16}</cyan> {message}"
_DEPLOYED_FORMAT = "[top-podcasts] - {level: <8} - {thread.name} - {message}"


def init_logging(level: str | None = None) -> None:
    """Initialize loguru logger.

    Args:
        level: Overrides the configured log level, e.g. "DEBUG" to see request URLs.
    """
    logger.remove()

    level = (level or config.log_level).upper()

    if config.local_mode:
        logger.add(sys.stdout, format=_LOCAL_FORMAT, level=level, colorize=True)
    else:
        logger.add(sys.stdout, format=_DEPLOYED_FORMAT, level=level, colorize=False)
