"""Log the current top podcasts chart."""

import argparse
from threading import Event

from loguru import logger

from top_podcasts.config import config
from top_podcasts.fetcher import PodcastFetcher
from top_podcasts.global_logger import init_logging
from top_podcasts.models.fetch_errors import FetchResult, RequestError
from top_podcasts.models.top_podcasts import DEFAULT_LIMIT, TopPodcastsResponse
from top_podcasts.utils.helpers import run_main_safely, setup_tracing

_RESULT_TIMEOUT = 60


def main(limit: int = DEFAULT_LIMIT, *, allow_explicit: bool = False) -> None:
    """Fetch the chart and log one line per podcast."""
    logger.info("Validating config...")
    config.validators.validate_all()

    delivered = Event()

    def on_complete(result: FetchResult) -> None:
        match result:
            case TopPodcastsResponse(feed=feed):
                for rank, podcast in enumerate(feed.results, start=1):
                    genres = ", ".join(genre.name for genre in podcast.genres)
                    logger.info(f"{rank:>3}. {podcast.name} - {podcast.artist_name} [{genres}]")
            case RequestError(status_code=status_code, body=body):
                logger.error(f"The request was rejected ({status_code}): {body}")
            case _:
                logger.error(f"Unable to fetch top podcasts: {result}")

        delivered.set()

    with PodcastFetcher() as fetcher:
        logger.info(f"Fetching top {limit} podcasts...")
        future = fetcher.fetch_top_podcasts(limit, allow_explicit, on_complete=on_complete)
        future.result(timeout=_RESULT_TIMEOUT)

    delivered.wait(timeout=_RESULT_TIMEOUT)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("limit", type=int, nargs="?", default=DEFAULT_LIMIT)
    parser.add_argument("--explicit", action="store_true", help="Include explicit podcasts.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log request details.")
    return parser.parse_args()


if __name__ == "__main__":
    _args = _parse_args()
    init_logging("DEBUG" if _args.verbose else None)
    setup_tracing(config)
    run_main_safely(main, _args.limit, allow_explicit=_args.explicit)
