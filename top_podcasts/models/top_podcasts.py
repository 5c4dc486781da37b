"""Records decoded from the top podcasts feed."""

import dataclasses
from typing import Annotated, Final

from pydantic import ConfigDict, Field, TypeAdapter
from pydantic.dataclasses import dataclass

_STRICT_CONFIG = ConfigDict(strict=True)

DEFAULT_LIMIT: Final = 50
PATH_TEMPLATE: Final = "top-podcasts/all/{limit}/{explicit}.json"


@dataclasses.dataclass(frozen=True)
class FetchRequestParams:
    """Parameters used to build the request path.

    limit is passed through as given; the API decides what to do with odd values.
    """

    limit: int = DEFAULT_LIMIT
    allow_explicit: bool = False

    @property
    def explicit_segment(self) -> str:
        """Get the explicit/non-explicit path segment."""
        return "explicit" if self.allow_explicit else "non-explicit"

    @property
    def path(self) -> str:
        """Get the request path, relative to the API base URL."""
        return PATH_TEMPLATE.format(limit=self.limit, explicit=self.explicit_segment)


@dataclass(frozen=True, config=_STRICT_CONFIG)
class Genre:
    """A genre a podcast is listed under."""

    name: str
    genre_id: Annotated[str, Field(alias="genreId")]


@dataclass(frozen=True, config=_STRICT_CONFIG)
class PodcastResult:
    """A single ranked podcast."""

    id: str
    artist_name: Annotated[str, Field(alias="artistName")]
    name: str
    artwork_url_100: Annotated[str, Field(alias="artworkUrl100")]
    genres: tuple[Genre, ...]


@dataclass(frozen=True, config=_STRICT_CONFIG)
class Feed:
    """Podcasts in rank order."""

    results: tuple[PodcastResult, ...]


@dataclass(frozen=True, config=_STRICT_CONFIG)
class TopPodcastsResponse:
    """Root object of the top podcasts payload."""

    feed: Feed


_response_adapter = TypeAdapter(TopPodcastsResponse)


def decode_top_podcasts_response(body: bytes) -> TopPodcastsResponse:
    """Decode a JSON payload into a TopPodcastsResponse.

    Raises:
        pydantic.ValidationError: If the body is not JSON or does not match the schema.
    """
    return _response_adapter.validate_json(body, strict=True)
