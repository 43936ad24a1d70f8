#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import asyncio
import logging
from collections.abc import Sequence
from typing import Final

import pandas as pd
import param

from .bulk import BulkAction, ModalState
from .defaults import DEFAULT_DEBOUNCE_WINDOW, DEFAULT_PAGE_SIZE
from .events import (
    ActionButtonClicked,
    ActionFailed,
    ActionSucceeded,
    DeleteCancelled,
    DeleteChosen,
    DeleteConfirmed,
    DisableClicked,
    EditChosen,
    EnableClicked,
    Event,
    FetchFailed,
    FetchingChanged,
    FetchSucceeded,
    FiltersReset,
    Mounted,
    PageClicked,
    PageSizeChanged,
    PopoverClosed,
    SearchChanged,
    SelectionChanged,
    SortChanged,
    TableChanged,
)
from .fetcher import DebouncedFetcher, Schedule, call_later
from .models import TransformPage
from .notifications import Notifications
from .paginator import page_index, validated_offset
from .query import ListQuery, SortDirection, query_from_url, query_to_url
from .reducer import reduce
from .rendering import empty_prompt, render_title, transforms_to_dataframe
from .router import ROUTES, Router, transform_route
from .service import TransformService
from .state import ListViewState
from .util import get_error_message

LOG = logging.getLogger(__name__)

_ACTION_VERBS: Final = {
    BulkAction.ENABLE: ("Enabled", "enable"),
    BulkAction.DISABLE: ("Disabled", "disable"),
    BulkAction.DELETE: ("Deleted", "delete"),
}


class ListViewController(param.Parameterized):
    """
    Reactive state and logic holder for the transforms list.

    User intents are turned into events that are reduced into a new,
    immutable `ListViewState`. Side effects, that is URL updates,
    remote calls and navigation, are issued after each transition.

    Args:
        service: Remote transform operations.
        notifications: Sink for error and success messages.
        router: Access to the browsable location.
        page_size: Page size used if the location does not provide one.
        debounce_window: Debounce window for list fetches in seconds.
        schedule: Timer function for the debounce window,
            defaults to the running loop's `call_later()`.
    """

    # ---- reactive state ----
    state = param.ClassSelector(class_=ListViewState, instantiate=False)
    # ---- reactive derived state ----
    title = param.String(default="")
    fetching = param.Boolean(default=False)
    page_index = param.Integer(default=0)
    page_count = param.Integer(default=1)
    pagination_visible = param.Boolean(default=False)
    empty_message = param.String(default="")
    popover_open = param.Boolean(default=False)
    delete_modal_visible = param.Boolean(default=False)
    # ---- reactive enablement ----
    enable_disabled = param.Boolean(default=True)
    disable_disabled = param.Boolean(default=True)
    actions_disabled = param.Boolean(default=True)
    edit_disabled = param.Boolean(default=True)
    delete_disabled = param.Boolean(default=True)

    def __init__(
        self,
        service: TransformService,
        notifications: Notifications,
        router: Router,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        debounce_window: float = DEFAULT_DEBOUNCE_WINDOW,
        schedule: Schedule = call_later,
    ):
        super().__init__(state=ListViewState())
        # ---- capabilities (not reactive) ----
        self._service = service
        self._notifications = notifications
        self._router = router
        self._page_size = page_size
        self._fetcher = DebouncedFetcher(
            service.get_transforms,
            on_success=self._on_fetch_success,
            on_failure=lambda error: self.dispatch(FetchFailed(error)),
            on_fetching=lambda fetching: self.dispatch(FetchingChanged(fetching)),
            window=debounce_window,
            schedule=schedule,
        )
        self._action_tasks: set[asyncio.Task] = set()

    @property
    def query(self) -> ListQuery:
        return self.state.query

    # ---- user intents ----

    def mount(self):
        """Read the query from the current location and fetch the first page."""
        self.dispatch(Mounted(query_from_url(self._router.location, self._page_size)))

    def on_search_change(self, search: str):
        self.dispatch(SearchChanged(search))

    def on_sort_change(self, sort_field: str, sort_direction: SortDirection | str):
        self.dispatch(SortChanged(sort_field, sort_direction))

    def on_page_click(self, page_index: int):
        self.dispatch(PageClicked(page_index))

    def on_page_size_change(self, page_size: int):
        self.dispatch(PageSizeChanged(page_size))

    def on_table_change(
        self,
        page_index: int,
        page_size: int,
        sort_field: str,
        sort_direction: SortDirection | str,
    ):
        self.dispatch(TableChanged(page_index, page_size, sort_field, sort_direction))

    def reset_filters(self):
        self.dispatch(FiltersReset())

    def on_selection_change(self, ids: Sequence[str]):
        self.dispatch(SelectionChanged(tuple(ids)))

    def set_selection(self, selection: list[int]):
        """Select rows by their index on the current page."""
        transforms = self.state.transforms
        # Indices may refer to a previous page while the table updates
        self.on_selection_change(
            [transforms[i].id for i in selection if 0 <= i < len(transforms)]
        )

    def on_action_button_click(self):
        self.dispatch(ActionButtonClicked())

    def close_popover(self):
        self.dispatch(PopoverClosed())

    def on_click_edit(self):
        self.dispatch(EditChosen())

    def show_delete_modal(self):
        self.dispatch(DeleteChosen())

    def close_delete_modal(self):
        self.dispatch(DeleteCancelled())

    def on_click_delete(self):
        self.dispatch(DeleteConfirmed())

    def on_enable(self):
        self.dispatch(EnableClicked())

    def on_disable(self):
        self.dispatch(DisableClicked())

    def on_click_create(self):
        self._router.push(ROUTES.CREATE_TRANSFORM)

    def on_click_transform(self, transform_id: str):
        self._router.push(transform_route(ROUTES.TRANSFORM_DETAILS, transform_id))

    # ---- derived (pure) ----

    @param.depends("state")
    def dataframe(self) -> pd.DataFrame:
        return transforms_to_dataframe(
            self.state.transforms, self.state.transform_metadata
        )

    def selected_indices(self) -> list[int]:
        selection = self.state.selection
        return [i for i, t in enumerate(self.state.transforms) if t.id in selection]

    @param.depends("state", watch=True, on_init=True)
    def _update_derived(self):
        state = self.state
        pagination = state.pagination
        self.param.update(
            title=render_title(state.transforms),
            fetching=state.fetching,
            page_index=pagination.page_index,
            page_count=pagination.page_count,
            pagination_visible=pagination.is_visible,
            empty_message=empty_prompt(state.query.is_filtered, state.fetching),
            popover_open=state.bulk.is_popover_open,
            delete_modal_visible=state.bulk.modal is ModalState.CONFIRM_DELETE,
            enable_disabled=not state.can_enable,
            disable_disabled=not state.can_disable,
            actions_disabled=not state.can_open_actions,
            edit_disabled=not state.can_edit,
            delete_disabled=not state.can_delete,
        )

    # ---- event processing ----

    def dispatch(self, event: Event):
        old_state = self.state
        new_state = reduce(old_state, event)
        if new_state is not old_state:
            self.state = new_state
        self._run_effects(event, old_state, new_state)

    def _run_effects(self, event: Event, old: ListViewState, new: ListViewState):
        if isinstance(event, Mounted) or new.query != old.query:
            self._router.replace(query_to_url(new.query))
            self._fetcher.request(new.query)

        match event:
            case FetchSucceeded(page=page):
                self._validate_offset(new.query, page.total_transforms)
            case FetchFailed(error=error):
                self._notifications.report_error(error)
            case EditChosen() if (
                old.bulk.is_popover_open and not new.bulk.is_popover_open
            ):
                transform_id = old.selection.single_id
                assert transform_id is not None
                self._router.push(transform_route(ROUTES.EDIT_TRANSFORM, transform_id))
            case ActionSucceeded(action=action) if old.bulk.is_submitting:
                past, _ = _ACTION_VERBS[action]
                LOG.info("%s %s", past, _format_ids(old.bulk.target_ids))
                self._notifications.report_success(
                    f"{past} {_format_ids(old.bulk.target_ids)}"
                )
                self._fetcher.request(new.query)
            case ActionFailed(action=action, error=error) if old.bulk.is_submitting:
                _, verb = _ACTION_VERBS[action]
                self._notifications.report_error(
                    f"Failed to {verb} {_format_ids(old.bulk.target_ids)}: {error}"
                )

        if new.bulk.is_submitting and not old.bulk.is_submitting:
            assert new.bulk.action is not None
            self._submit(new.bulk.action, new.bulk.target_ids)

    def _on_fetch_success(self, _query: ListQuery, page: TransformPage):
        self.dispatch(FetchSucceeded(page))

    def _validate_offset(self, query: ListQuery, total_transforms: int):
        offset = validated_offset(query.offset, query.page_size, total_transforms)
        if offset != query.offset:
            LOG.debug("Offset %d is out of range, moving to %d", query.offset, offset)
            self.dispatch(PageClicked(page_index(offset, query.page_size)))

    def _submit(self, action: BulkAction, ids: tuple[str, ...]):
        task = asyncio.get_running_loop().create_task(self._run_action(action, ids))
        self._action_tasks.add(task)

    async def _run_action(self, action: BulkAction, ids: tuple[str, ...]):
        try:
            try:
                if action is BulkAction.DELETE:
                    response = await self._service.delete_transforms(ids)
                else:
                    response = await self._service.set_enabled(
                        ids, action is BulkAction.ENABLE
                    )
            except Exception as e:
                self.dispatch(
                    ActionFailed(action, get_error_message(e, "Remote call failed"))
                )
            else:
                if response.ok:
                    self.dispatch(ActionSucceeded(action))
                else:
                    self.dispatch(
                        ActionFailed(action, response.error or "Remote call failed")
                    )
        finally:
            self._action_tasks.discard(asyncio.current_task())

    # ---- lifecycle ----

    async def settle(self, flush: bool = True):
        """Wait until no fetch and no bulk action is outstanding.

        Args:
            flush: Whether to send a query waiting in the debounce
                window immediately instead of leaving it pending.
        """
        while True:
            if flush:
                self._fetcher.flush()
            if not (self._fetcher.fetching or self._action_tasks):
                break
            await asyncio.gather(self._fetcher.join(), *self._action_tasks)

    def close(self):
        self._fetcher.cancel()


def _format_ids(ids: Sequence[str]) -> str:
    names = ", ".join(f"`{i}`" for i in ids)
    return f"transform job {names}" if len(ids) == 1 else f"transform jobs {names}"
