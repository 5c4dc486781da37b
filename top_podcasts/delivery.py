"""Contexts on which fetch results are handed to consumers.

Every result callback runs on one designated context, so consumers can touch
shared state from their callbacks without extra locking.
"""

import asyncio
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Protocol, Self

from loguru import logger

__all__ = ["DeliveryContext", "EventLoopDeliveryContext", "SerialDeliveryContext", "main_context"]


class DeliveryContext(Protocol):
    """Something that can run a callback on a designated context."""

    def dispatch(self, callback: Callable[[Any], None], result: Any) -> None:  # noqa: D102
        ...


def _run_callback(callback: Callable[[Any], None], result: Any) -> None:
    try:
        callback(result)
    except Exception:
        logger.exception(f"Result callback {getattr(callback, '__qualname__', callback)!r} raised.")


class SerialDeliveryContext:
    """Run callbacks one at a time, in submission order, on a single dedicated thread."""

    def __init__(self, name: str = "main") -> None:
        self.name = name
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)

    def dispatch(self, callback: Callable[[Any], None], result: Any) -> None:
        """Schedule the callback on this context's thread."""
        self._executor.submit(_run_callback, callback, result)

    def shutdown(self, *, wait: bool = True) -> None:
        """Stop accepting callbacks, optionally waiting for queued ones to run."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_: object) -> None:
        self.shutdown()


class EventLoopDeliveryContext:
    """Run callbacks on an asyncio event loop, from any thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.loop = loop

    def dispatch(self, callback: Callable[[Any], None], result: Any) -> None:
        """Schedule the callback on the event loop."""
        self.loop.call_soon_threadsafe(_run_callback, callback, result)


main_context = SerialDeliveryContext()
