from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

import httpx

from .errors import GraphQLResponseError, TransportError
from .logging import get_logger, sanitize_headers
from .models import GraphQLRequest, GraphQLResponse, parse_graphql_response

BASE_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
    "Accept-Charset": "utf-8",
}


@dataclass(frozen=True)
class HttpPostResponse:
    url: str
    status: int
    message: str
    body: str


HttpPostFunc = Callable[[str, Dict[str, str], str], HttpPostResponse]


def httpx_poster(http_client: httpx.Client) -> HttpPostFunc:
    def post(url: str, headers: Dict[str, str], body: str) -> HttpPostResponse:
        response = http_client.post(url, headers=headers, content=body.encode("utf-8"))
        return HttpPostResponse(
            url=str(response.url) or url,
            status=response.status_code,
            message=response.reason_phrase or "",
            body=response.text,
        )

    return post


def raise_for_status(response: HttpPostResponse) -> None:
    status = response.status
    if 400 <= status < 500:
        raise TransportError(status, "Client Error", response.message, response.url)
    if 500 <= status < 600:
        raise TransportError(status, "Server Error", response.message, response.url)
    if status < 100 or status > 599:
        raise TransportError(status, "Invalid Status", response.message, response.url)


class GraphQLClient:
    """Posts GraphQL requests and validates the response envelope.

    The HTTP call goes through ``post``; when none is given one is built on an
    ``httpx.Client`` (the injected ``http_client`` or one owned by this object).
    """

    def __init__(
        self,
        post: Optional[HttpPostFunc] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        timeout_seconds: float = 30.0,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = get_logger(logger)
        self._owns_client = False
        if post is None:
            if http_client is None:
                http_client = httpx.Client(timeout=timeout_seconds)
                self._owns_client = True
            post = httpx_poster(http_client)
        self._http_client = http_client
        self._post = post

    def close(self) -> None:
        if self._owns_client and self._http_client is not None:
            self._http_client.close()

    def __enter__(self) -> "GraphQLClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def query(
        self,
        url: str,
        headers: Mapping[str, str],
        payload: GraphQLRequest,
    ) -> GraphQLResponse:
        merged = {**BASE_HEADERS, **headers}
        body = json.dumps(payload.to_dict())

        debug = self.logger.isEnabledFor(logging.DEBUG)
        if debug:
            self.logger.debug(
                "POST %s headers=%s\n%s",
                url,
                sanitize_headers(merged),
                json.dumps(payload.to_dict(), indent=2),
            )

        response = self._post(url, merged, body)
        raise_for_status(response)

        try:
            raw = json.loads(response.body)
        except ValueError as exc:
            raise GraphQLResponseError(
                f'Failed to parse JSON response with error: "{exc}" for query: "{response.body}"',
                response,
            ) from exc

        if debug:
            self.logger.debug(json.dumps(raw, indent=2))

        return parse_graphql_response(raw)
