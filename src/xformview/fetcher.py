#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Protocol, TypeAlias

from .defaults import DEFAULT_DEBOUNCE_WINDOW
from .models import ServerResponse, TransformPage
from .query import ListQuery
from .util import get_error_message

LOG = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "There was a problem loading transforms"


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


FetchCall: TypeAlias = Callable[[ListQuery], Awaitable[ServerResponse[TransformPage]]]
Schedule: TypeAlias = Callable[[float, Callable[[], None]], TimerHandle]
SuccessCallback: TypeAlias = Callable[[ListQuery, TransformPage], None]
FailureCallback: TypeAlias = Callable[[str], None]
FetchingCallback: TypeAlias = Callable[[bool], None]


def call_later(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Schedule `callback` on the running event loop."""
    return asyncio.get_running_loop().call_later(delay, callback)


class DebouncedFetcher:
    """Issues list fetches for rapidly changing queries.

    The first request in a quiet period is sent immediately.
    Further requests within `window` seconds after the previous one are
    coalesced: only the most recent query is sent once the window
    elapsed without another request.

    Every request increments a generation counter. A response is applied
    only if no newer request has been made since its request, so the
    visible effect is that of the most recent request only. Stale
    responses, successful or not, are dropped.

    Args:
        fetch: The remote list call.
        on_success: Called with the query and the page of an
            up-to-date successful response.
        on_failure: Called with an error message for an up-to-date
            failed response or a failed call.
        on_fetching: Called with `True` when the first fetch starts
            and with `False` when the last outstanding one completed.
        window: The debounce window in seconds.
        schedule: Function used to schedule the debounce timer,
            defaults to the running loop's `call_later()`.
    """

    def __init__(
        self,
        fetch: FetchCall,
        *,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
        on_fetching: Optional[FetchingCallback] = None,
        window: float = DEFAULT_DEBOUNCE_WINDOW,
        schedule: Schedule = call_later,
    ):
        self._fetch = fetch
        self._on_success = on_success
        self._on_failure = on_failure
        self._on_fetching = on_fetching
        self._window = window
        self._schedule = schedule
        self._generation = 0
        self._timer: TimerHandle | None = None
        self._pending: ListQuery | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def fetching(self) -> bool:
        """Whether at least one fetch is outstanding."""
        return bool(self._tasks)

    @property
    def pending(self) -> ListQuery | None:
        """The query waiting for the debounce window to elapse, if any."""
        return self._pending

    def request(self, query: ListQuery):
        self._generation += 1
        if self._timer is None:
            self._timer = self._schedule(self._window, self._on_timer)
            self._fire(query)
        else:
            self._timer.cancel()
            self._timer = self._schedule(self._window, self._on_timer)
            self._pending = query

    def flush(self):
        """Send a pending query now instead of waiting for the timer."""
        self._cancel_timer()
        query, self._pending = self._pending, None
        if query is not None:
            self._fire(query)

    def cancel(self):
        """Drop a pending query. Outstanding fetches are not aborted."""
        self._cancel_timer()
        self._pending = None

    async def join(self):
        """Wait until all outstanding fetches completed."""
        while self._tasks:
            await asyncio.gather(*self._tasks)

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self):
        self._timer = None
        query, self._pending = self._pending, None
        if query is not None:
            self._fire(query)

    def _fire(self, query: ListQuery):
        was_fetching = self.fetching
        task = asyncio.get_running_loop().create_task(
            self._run(query, self._generation)
        )
        self._tasks.add(task)
        if not was_fetching and self._on_fetching is not None:
            self._on_fetching(True)

    async def _run(self, query: ListQuery, generation: int):
        try:
            page: TransformPage | None = None
            error: str | None = None
            try:
                response = await self._fetch(query)
            except Exception as e:
                error = get_error_message(e, FETCH_ERROR_MESSAGE)
            else:
                if response.ok:
                    page = response.response or TransformPage()
                else:
                    error = response.error or FETCH_ERROR_MESSAGE

            if generation != self._generation:
                LOG.debug(
                    "Dropping stale response for generation %d, latest is %d",
                    generation,
                    self._generation,
                )
            elif page is not None:
                self._on_success(query, page)
            else:
                self._on_failure(error or FETCH_ERROR_MESSAGE)
        finally:
            self._tasks.discard(asyncio.current_task())
            if not self._tasks and self._on_fetching is not None:
                self._on_fetching(False)
