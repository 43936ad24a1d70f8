#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from collections.abc import Sequence
from typing import Protocol

from .models import ServerResponse, TransformPage
from .query import ListQuery


class TransformService(Protocol):
    """Remote operations on transform jobs.

    Implementations report remote errors as responses with `ok=False`.
    Transport failures may also be raised as exceptions.
    """

    async def get_transforms(self, query: ListQuery) -> ServerResponse[TransformPage]:
        """Get the page of transforms described by `query`."""

    async def set_enabled(
        self, ids: Sequence[str], enabled: bool
    ) -> ServerResponse[bool]:
        """Start (`enabled=True`) or stop the transforms with given `ids`."""

    async def delete_transforms(self, ids: Sequence[str]) -> ServerResponse[bool]:
        """Delete the transforms with given `ids`."""
