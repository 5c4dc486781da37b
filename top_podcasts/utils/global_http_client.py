from typing import Any

import requests
from typing_extensions import override

from top_podcasts.config import config

__all__ = ["HttpClient", "http_client"]

_CUSTOM_HEADERS = {"User-Agent": config.user_agent, "Accept": "application/json"}


class HttpClient(requests.Session):
    def __init__(self):
        super().__init__()
        self.headers.update(_CUSTOM_HEADERS)

    @override
    def get(self, *args: Any, raise_for_status: bool = True, **kwargs: Any) -> requests.Response:
        return self._request("GET", *args, raise_for_status=raise_for_status, **kwargs)

    def _request(self, *args: Any, raise_for_status: bool, **kwargs: Any) -> requests.Response:
        timeout = kwargs.pop("timeout", config.http_timeout)

        response = self.request(*args, **kwargs, timeout=timeout)

        if raise_for_status:
            response.raise_for_status()

        return response


http_client = HttpClient()
