#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from panel.io.location import Location


class LocationRouter:
    """A router backed by the location of a Panel session."""

    def __init__(self, location: Location):
        self._location = location

    @property
    def location(self) -> str:
        return (self._location.search or "").lstrip("?")

    def replace(self, query_string: str) -> None:
        self._location.search = f"?{query_string}" if query_string else ""

    def push(self, path: str) -> None:
        pathname, _, query_string = path.partition("?")
        self._location.param.update(
            pathname=pathname, search=f"?{query_string}" if query_string else ""
        )
