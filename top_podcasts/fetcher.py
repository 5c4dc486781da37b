"""Fetch the ranked list of top podcasts.

Each call is one linear pipeline: build the URL, GET it, classify the outcome,
decode the body, then hand exactly one FetchResult to the caller's callback on
the delivery context. Recognised failures become a FetchError. Anything the API
contract rules out (an unexpected status code, an unexpected decoding exception)
is raised as a TopPodcastsError instead.
"""

import asyncio
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from http import HTTPStatus
from typing import Self

from loguru import logger
from pydantic import ValidationError
from requests import RequestException, Response, Session

from top_podcasts.config import config
from top_podcasts.delivery import DeliveryContext, EventLoopDeliveryContext, main_context
from top_podcasts.exceptions import TopPodcastsError, UnhandledDecodingError, UnhandledStatusCodeError
from top_podcasts.models.fetch_errors import (
    NO_BODY_PLACEHOLDER,
    DecodingError,
    FetchError,
    FetchResult,
    InvalidResponse,
    NetworkingError,
    RequestError,
    ServerError,
)
from top_podcasts.models.top_podcasts import (
    DEFAULT_LIMIT,
    FetchRequestParams,
    TopPodcastsResponse,
    decode_top_podcasts_response,
)
from top_podcasts.utils.global_http_client import HttpClient, http_client
from top_podcasts.utils.helpers import decode_body_text, join_url

ResultCallback = Callable[[FetchResult], None]


class PodcastFetcher:
    """Client for the top podcasts endpoint.

    Args:
        session: HTTP transport. Defaults to the shared HttpClient.
        base_url: API root. Defaults to the configured base URL.
        delivery_context: Where result callbacks run. Defaults to the main context.
        executor: Runs the HTTP requests. When omitted, the fetcher creates (and owns) a thread pool.
    """

    def __init__(
        self,
        session: Session = http_client,
        base_url: str | None = None,
        delivery_context: DeliveryContext = main_context,
        executor: Executor | None = None,
    ) -> None:
        self.session = session
        self.base_url = base_url or config.base_url
        self.delivery_context = delivery_context

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=config.max_workers, thread_name_prefix="top-podcasts"
        )

    def build_url(self, params: FetchRequestParams) -> str:
        """Build the request URL for the given parameters."""
        return join_url(self.base_url, params.path)

    def fetch_top_podcasts(
        self,
        limit: int = DEFAULT_LIMIT,
        allow_explicit: bool = False,  # noqa: FBT001, FBT002
        *,
        on_complete: ResultCallback,
    ) -> "Future[FetchResult]":
        """Fetch the top podcasts without blocking.

        on_complete is called exactly once, on the delivery context, with either a
        TopPodcastsResponse or a FetchError. The returned future resolves with the
        same value once the callback has been scheduled. If the API breaks its
        contract, on_complete is not called and the future raises a TopPodcastsError.
        """
        params = FetchRequestParams(limit=limit, allow_explicit=allow_explicit)
        return self._submit(params, on_complete, self.delivery_context)

    async def fetch_top_podcasts_async(
        self,
        limit: int = DEFAULT_LIMIT,
        allow_explicit: bool = False,  # noqa: FBT001, FBT002
    ) -> FetchResult:
        """Fetch the top podcasts, delivering the result on the running event loop."""
        loop = asyncio.get_running_loop()
        delivered: asyncio.Future[FetchResult] = loop.create_future()

        params = FetchRequestParams(limit=limit, allow_explicit=allow_explicit)

        def deliver(result: FetchResult) -> None:
            # The awaiting task may have been cancelled while the request was in flight.
            if not delivered.done():
                delivered.set_result(result)

        work = self._submit(params, deliver, EventLoopDeliveryContext(loop))

        await asyncio.wrap_future(work)
        return await delivered

    def close(self) -> None:
        """Shut down the request executor if this fetcher created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def _submit(
        self, params: FetchRequestParams, on_complete: ResultCallback, delivery_context: DeliveryContext
    ) -> "Future[FetchResult]":
        url = self.build_url(params)
        logger.debug(f"Requesting top podcasts: {url}")

        return self._executor.submit(self._fetch, url, on_complete, delivery_context)

    def _fetch(self, url: str, on_complete: ResultCallback, delivery_context: DeliveryContext) -> FetchResult:
        try:
            outcome = self._perform(url)
            result = outcome if isinstance(outcome, FetchError) else self._decode(outcome)

            _log_result(url, result)
            delivery_context.dispatch(on_complete, result)
        except TopPodcastsError:
            logger.opt(exception=True).critical(f"Top podcasts API broke its contract for {url}")
            raise
        except Exception:
            logger.opt(exception=True).critical(f"Unexpected failure while fetching top podcasts from {url}")
            raise

        return result

    def _perform(self, url: str) -> bytes | FetchError:
        """Run the request and classify the transport outcome.

        Returns the body of a 200 response, or the FetchError describing the failure.
        """
        try:
            response = self._get(url)
            body = response.content if isinstance(response, Response) else None
        except RequestException as e:
            return NetworkingError(e)

        if body is None:
            return InvalidResponse()

        match response.status_code:
            case HTTPStatus.OK:
                return body
            case status_code if 400 <= status_code <= 499:  # noqa: PLR2004
                text = decode_body_text(body)
                return RequestError(status_code, NO_BODY_PLACEHOLDER if text is None else text)
            case status_code if 500 <= status_code <= 599:  # noqa: PLR2004
                return ServerError()
            case status_code:
                raise UnhandledStatusCodeError(status_code)

    def _get(self, url: str) -> Response:
        if isinstance(self.session, HttpClient):
            return self.session.get(url, raise_for_status=False)

        return self.session.get(url, timeout=config.http_timeout)

    @staticmethod
    def _decode(body: bytes) -> TopPodcastsResponse | DecodingError:
        try:
            return decode_top_podcasts_response(body)
        except ValidationError as e:
            return DecodingError(e)
        except Exception as e:
            raise UnhandledDecodingError(f"Unhandled error raised while decoding: {type(e).__name__}") from e


def _log_result(url: str, result: FetchResult) -> None:
    if isinstance(result, TopPodcastsResponse):
        logger.info(f"Fetched {len(result.feed.results)} top podcasts from {url}")
    else:
        logger.warning(f"Failed to fetch top podcasts from {url}: {result}")
