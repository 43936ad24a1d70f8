#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import asyncio
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Callable, Final

from xformview.models import ServerResponse, Transform, TransformPage, TransformSpec
from xformview.query import ListQuery, SortDirection

_SORT_KEYS: Final[dict[str, Callable[[Transform], Any]]] = {
    "_id": lambda t: t.id,
    "transform.source_index": lambda t: t.source_index,
    "transform.target_index": lambda t: t.target_index,
    "transform.enabled": lambda t: t.enabled,
}


class MemoryTransformService:
    """Transform operations on an in-memory collection.

    Used for demos and for testing.

    Args:
        transforms: The initial transforms.
        metadata: Status metadata keyed by transform identifier.
        delay: Artificial latency of every call in seconds.
    """

    def __init__(
        self,
        transforms: Iterable[Transform] = (),
        metadata: Mapping[str, Any] | None = None,
        delay: float = 0.0,
    ):
        self._transforms: dict[str, Transform] = {t.id: t for t in transforms}
        self.metadata: dict[str, Any] = dict(metadata or {})
        self.delay = delay

    @classmethod
    def create_demo(cls, count: int = 45, delay: float = 0.2):
        statuses = ("started", "stopped", "finished", "failed", "init")
        transforms = [
            Transform(
                id=f"transform-{i:03d}",
                seq_no=i,
                primary_term=1,
                transform=TransformSpec(
                    transform_id=f"transform-{i:03d}",
                    description=f"Demo transform {i}",
                    source_index=f"logs-{i % 7:02d}",
                    target_index=f"logs-summary-{i:03d}",
                    enabled=i % 3 != 0,
                ),
            )
            for i in range(1, count + 1)
        ]
        metadata = {
            t.id: {"transform_metadata": {"status": statuses[i % len(statuses)]}}
            for i, t in enumerate(transforms)
        }
        return cls(transforms, metadata=metadata, delay=delay)

    @property
    def transforms(self) -> list[Transform]:
        return list(self._transforms.values())

    async def get_transforms(self, query: ListQuery) -> ServerResponse[TransformPage]:
        await self._sleep()
        matches = [t for t in self._transforms.values() if _matches(t, query.search)]
        matches.sort(
            key=_SORT_KEYS[query.sort_field],
            reverse=query.sort_direction is SortDirection.DESC,
        )
        page = matches[query.offset : query.offset + query.page_size]
        return ServerResponse.success(
            TransformPage(
                transforms=page,
                total_transforms=len(matches),
                metadata={
                    t.id: self.metadata[t.id] for t in page if t.id in self.metadata
                },
            )
        )

    async def set_enabled(
        self, ids: Sequence[str], enabled: bool
    ) -> ServerResponse[bool]:
        await self._sleep()
        missing = self._get_missing(ids)
        if missing:
            return ServerResponse.failure(f"Transform(s) not found: {missing}")
        for transform_id in ids:
            transform = self._transforms[transform_id]
            self._transforms[transform_id] = transform.model_copy(
                update={
                    "transform": transform.transform.model_copy(
                        update={"enabled": enabled}
                    )
                }
            )
        return ServerResponse.success(True)

    async def delete_transforms(self, ids: Sequence[str]) -> ServerResponse[bool]:
        await self._sleep()
        missing = self._get_missing(ids)
        if missing:
            return ServerResponse.failure(f"Transform(s) not found: {missing}")
        for transform_id in ids:
            del self._transforms[transform_id]
            self.metadata.pop(transform_id, None)
        return ServerResponse.success(True)

    def _get_missing(self, ids: Sequence[str]) -> str:
        return ", ".join(i for i in ids if i not in self._transforms)

    async def _sleep(self):
        if self.delay > 0:
            await asyncio.sleep(self.delay)


def _matches(transform: Transform, search: str) -> bool:
    if not search:
        return True
    search = search.lower()
    return any(
        search in text.lower()
        for text in (
            transform.id,
            transform.source_index,
            transform.target_index,
            transform.transform.description,
        )
    )
