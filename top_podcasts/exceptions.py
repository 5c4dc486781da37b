class TopPodcastsError(Exception):
    """Base class for top podcasts exceptions.

    These signal broken assumptions about the upstream API and are never
    delivered to callers as a FetchError.
    """


class UnhandledStatusCodeError(TopPodcastsError):
    """Exception raised when the API answers with a status outside 200, 4xx and 5xx."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Unhandled HTTP status code: {status_code}")
        self.status_code = status_code


class UnhandledDecodingError(TopPodcastsError):
    """Exception raised when decoding fails with something other than a validation error."""
