from __future__ import annotations

from typing import Any


class TransportError(Exception):
    def __init__(self, status_code: int, kind: str, reason: str, url: str):
        super().__init__(f"{status_code} {kind}: {reason} for url: {url}")
        self.status_code = status_code
        self.reason = reason
        self.url = url


class SerializationError(Exception):
    pass


class GraphQLResponseError(SerializationError):
    def __init__(self, message: str, response: Any = None):
        super().__init__(message)
        self.response = response
