from collections.abc import Callable
from typing import Any

import sentry_sdk
from loguru import logger
from sentry_sdk.integrations.loguru import LoggingLevels, LoguruIntegration

from top_podcasts.config import ConfigProto


def decode_body_text(body: bytes) -> str | None:
    """Decode a response body as UTF-8 text, or return None if it is not valid text."""
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        return None


def join_url(base_url: str, path: str) -> str:
    """Append a relative path to a base URL with exactly one separating slash."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def run_main_safely(func: Callable[..., None], *args: Any, **kwargs: Any) -> None:
    """Run a function safely, logging any exceptions and providing a graceful exit."""
    try:
        with sentry_sdk.start_transaction(op="task", name=func.__module__):
            func(*args, **kwargs)
    except Exception:
        logger.exception("Exiting due to exception.")
        raise
    else:
        logger.info("Exiting without exception.")
    finally:
        sentry_sdk.flush(timeout=2)


def setup_tracing(config: ConfigProto) -> None:
    """Set up tracing."""
    if not config.local_mode:
        sentry_loguru = LoguruIntegration(
            level=LoggingLevels.DEBUG.value,
            event_level=LoggingLevels.ERROR.value,
        )

        sentry_sdk.init(
            dsn=config.sentry_dsn,
            environment="production",
            traces_sample_rate=1.0,
            integrations=[sentry_loguru],
        )
