import json
import threading
from collections.abc import Callable, Iterator
from typing import Any
from unittest.mock import MagicMock, create_autospec

import pytest
import requests

from top_podcasts.config import CONFIG_FILE, config
from top_podcasts.delivery import SerialDeliveryContext
from top_podcasts.fetcher import PodcastFetcher
from top_podcasts.utils.global_http_client import HttpClient

TEST_BASE_URL = "https://rss.example.com/api/v1/us/podcasts/"
DELIVERY_THREAD_NAME = "test-main"


@pytest.fixture(autouse=True, scope="session")
def clean_config() -> None:
    """Remove validators and reload the packaged defaults (to prevent external calls)."""
    config.validators.clear()
    config.load_file(CONFIG_FILE)


def make_response(status_code: int, content: bytes | None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = content  # noqa: SLF001  # pyright: ignore[reportPrivateUsage]
    return response


# region Payloads
@pytest.fixture(name="payload")
def mock_payload() -> dict[str, Any]:
    return {
        "feed": {
            "title": "Top Podcasts",
            "results": [
                {
                    "id": "1200361736",
                    "artistName": "The New York Times",
                    "name": "The Daily",
                    "artworkUrl100": "https://example.com/daily/100x100.png",
                    "kind": "podcast",
                    "genres": [
                        {"name": "Daily News", "genreId": "1526", "url": "https://example.com/genre/1526"},
                        {"name": "News", "genreId": "1489", "url": "https://example.com/genre/1489"},
                    ],
                },
                {
                    "id": "1028908750",
                    "artistName": "Wondery",
                    "name": "Dr. Death",
                    "artworkUrl100": "https://example.com/death/100x100.png",
                    "genres": [{"name": "True Crime", "genreId": "1488"}],
                },
                {
                    "id": "1322200189",
                    "artistName": "NPR",
                    "name": "Up First",
                    "artworkUrl100": "https://example.com/up-first/100x100.png",
                    "genres": [],
                },
            ],
        }
    }


@pytest.fixture(name="payload_bytes")
def mock_payload_bytes(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload).encode()


# endregion
# region Collaborators
@pytest.fixture(name="http_client")
def mock_http_client(payload_bytes: bytes) -> MagicMock:
    http_client = create_autospec(HttpClient, instance=True)
    http_client.get.return_value = make_response(200, payload_bytes)
    return http_client


@pytest.fixture(name="delivery_context")
def mock_delivery_context() -> Iterator[SerialDeliveryContext]:
    context = SerialDeliveryContext(DELIVERY_THREAD_NAME)
    yield context
    context.shutdown()


@pytest.fixture(name="fetcher")
def mock_fetcher(http_client: MagicMock, delivery_context: SerialDeliveryContext) -> Iterator[PodcastFetcher]:
    with PodcastFetcher(http_client, TEST_BASE_URL, delivery_context) as fetcher:
        yield fetcher


# endregion
@pytest.fixture(name="on_complete")
def mock_on_complete() -> MagicMock:
    """Result callback that also records the name of the thread it ran on."""
    on_complete = MagicMock()
    on_complete.thread_names = []
    on_complete.side_effect = lambda _: on_complete.thread_names.append(threading.current_thread().name)
    return on_complete


@pytest.fixture(name="response_factory")
def mock_response_factory() -> Callable[[int, bytes | None], requests.Response]:
    return make_response


@pytest.fixture(name="fetch_and_wait")
def mock_fetch_and_wait(
    fetcher: PodcastFetcher, delivery_context: SerialDeliveryContext, on_complete: MagicMock
) -> Callable[..., Any]:
    """Fetch, then wait for the delivery context to run every queued callback."""

    def fetch_and_wait(*args: Any, **kwargs: Any) -> Any:
        future = fetcher.fetch_top_podcasts(*args, on_complete=on_complete, **kwargs)
        try:
            return future.result(timeout=5)
        finally:
            delivery_context.shutdown(wait=True)

    return fetch_and_wait
