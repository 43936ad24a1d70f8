#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from typing import Final, Protocol
from urllib.parse import urlencode


class ROUTES:
    TRANSFORMS: Final = "/transforms"
    CREATE_TRANSFORM: Final = "/create-transform"
    EDIT_TRANSFORM: Final = "/edit-transform"
    TRANSFORM_DETAILS: Final = "/transform-details"


def transform_route(route: str, transform_id: str) -> str:
    return f"{route}?{urlencode({'id': transform_id})}"


class Router(Protocol):
    """Reads and writes the browsable location of the list."""

    @property
    def location(self) -> str:
        """The current query string, without leading `?`."""

    def replace(self, query_string: str) -> None:
        """Replace the query string without adding a history entry."""

    def push(self, path: str) -> None:
        """Navigate to `path`, adding a history entry."""


class MemoryRouter:
    """A router that keeps its history in memory."""

    def __init__(self, location: str = "", path: str = ROUTES.TRANSFORMS):
        self.history: list[str] = [_join(path, location.lstrip("?"))]

    @property
    def current(self) -> str:
        return self.history[-1]

    @property
    def path(self) -> str:
        return self.current.partition("?")[0]

    @property
    def location(self) -> str:
        return self.current.partition("?")[2]

    def replace(self, query_string: str) -> None:
        self.history[-1] = _join(self.path, query_string)

    def push(self, path: str) -> None:
        self.history.append(path)


def _join(path: str, query_string: str) -> str:
    return f"{path}?{query_string}" if query_string else path
