"""Failures delivered to callers of the fetcher.

FetchError is a closed union: match on it to handle every case.
"""

from dataclasses import dataclass
from typing import Final

from pydantic import ValidationError
from requests import RequestException

from top_podcasts.models.top_podcasts import TopPodcastsResponse

NO_BODY_PLACEHOLDER: Final = "<no body>"


@dataclass(frozen=True)
class NetworkingError:
    """The transport failed before an HTTP response was received (DNS, TLS, connection, timeout)."""

    cause: RequestException

    def __str__(self) -> str:
        return f"Networking error: {type(self.cause).__name__}: {self.cause}"


@dataclass(frozen=True)
class ServerError:
    """HTTP 5xx."""

    def __str__(self) -> str:
        return "Server error"


@dataclass(frozen=True)
class RequestError:
    """HTTP 4xx."""

    status_code: int
    body: str

    def __str__(self) -> str:
        return f"Request error {self.status_code}: {self.body}"


@dataclass(frozen=True)
class InvalidResponse:
    """No HTTP response or no body came back from the transport."""

    def __str__(self) -> str:
        return "Invalid response"


@dataclass(frozen=True)
class DecodingError:
    """The payload did not match the expected schema."""

    cause: ValidationError

    def __str__(self) -> str:
        return f"Decoding error: {self.cause.error_count()} problem(s), first at {self.location}"

    @property
    def location(self) -> str:
        """Dotted path of the first field that failed to decode."""
        errors = self.cause.errors()
        if not errors:
            return ""

        return ".".join(str(part) for part in errors[0]["loc"])


FetchError = NetworkingError | ServerError | RequestError | InvalidResponse | DecodingError
FetchResult = TopPodcastsResponse | FetchError

