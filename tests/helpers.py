#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import asyncio
from collections.abc import Sequence
from typing import Callable

from xformview.models import ServerResponse, Transform, TransformPage, TransformSpec
from xformview.query import ListQuery


def make_transform(
    transform_id: str,
    source_index: str = "logs",
    target_index: str = "logs-summary",
    enabled: bool = True,
    description: str = "",
) -> Transform:
    return Transform(
        id=transform_id,
        seq_no=1,
        primary_term=1,
        transform=TransformSpec(
            transform_id=transform_id,
            description=description,
            source_index=source_index,
            target_index=target_index,
            enabled=enabled,
        ),
    )


def make_page(*ids: str, total: int | None = None) -> TransformPage:
    return TransformPage(
        transforms=[make_transform(i) for i in ids],
        total_transforms=len(ids) if total is None else total,
    )


class ManualTimer:
    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """A debounce timer driven by explicit calls to `advance()`."""

    def __init__(self):
        self.now = 0.0
        self.timers: list[ManualTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def active_timers(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float):
        self.now += seconds
        for timer in list(self.timers):
            if not timer.cancelled and timer.due <= self.now:
                self.timers.remove(timer)
                timer.callback()


class ControlledService:
    """A transform service whose list calls are completed by the test."""

    def __init__(self):
        self.list_calls: list[tuple[ListQuery, asyncio.Future]] = []
        self.enable_calls: list[tuple[tuple[str, ...], bool]] = []
        self.delete_calls: list[tuple[str, ...]] = []
        self.action_response: ServerResponse[bool] = ServerResponse.success(True)

    @property
    def queries(self) -> list[ListQuery]:
        return [q for q, _ in self.list_calls]

    async def get_transforms(self, query: ListQuery) -> ServerResponse[TransformPage]:
        future = asyncio.get_running_loop().create_future()
        self.list_calls.append((query, future))
        return await future

    def resolve(self, index: int, response: ServerResponse | Exception):
        _, future = self.list_calls[index]
        if isinstance(response, Exception):
            future.set_exception(response)
        else:
            future.set_result(response)

    async def set_enabled(
        self, ids: Sequence[str], enabled: bool
    ) -> ServerResponse[bool]:
        self.enable_calls.append((tuple(ids), enabled))
        return self.action_response

    async def delete_transforms(self, ids: Sequence[str]) -> ServerResponse[bool]:
        self.delete_calls.append(tuple(ids))
        return self.action_response


class RecordingNotifications:
    def __init__(self):
        self.errors: list[str] = []
        self.successes: list[str] = []

    def report_error(self, message: str) -> None:
        self.errors.append(message)

    def report_success(self, message: str) -> None:
        self.successes.append(message)


async def wait_for_tasks():
    """Give tasks created so far the chance to run to completion."""
    for _ in range(5):
        await asyncio.sleep(0)
