#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import logging
from dataclasses import replace

from .bulk import BulkAction, BulkActionController, BulkState
from .defaults import DEFAULT_SEARCH
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
from .query import ListQuery, SortDirection
from .state import ListViewState

LOG = logging.getLogger(__name__)


def reduce(state: ListViewState, event: Event) -> ListViewState:
    """Compute the state that follows `state` after `event`.

    This is a pure function; side effects such as URL updates
    and remote calls are left to the caller.
    Events that are not applicable in the given state
    return `state` unchanged.
    """
    match event:
        case Mounted(query=query):
            return replace(state, query=query)
        case SearchChanged(search=search):
            return _with_query(state, state.query.with_search(search))
        case SortChanged(sort_field=sort_field, sort_direction=sort_direction):
            return _with_query(
                state, state.query.with_sort(sort_field, sort_direction)
            )
        case PageClicked(page_index=page_index):
            return _with_query(state, state.query.with_page(page_index))
        case PageSizeChanged(page_size=page_size):
            return _with_query(state, state.query.with_page_size(page_size))
        case TableChanged():
            return _with_query(state, _get_table_query(state.query, event))
        case FiltersReset():
            return _with_query(state, state.query.with_search(DEFAULT_SEARCH))
        case FetchingChanged(fetching=fetching):
            return replace(state, fetching=fetching)
        case FetchSucceeded(page=page):
            # Selection is cleared on every refresh
            return replace(
                state,
                transforms=tuple(page.transforms),
                total_transforms=page.total_transforms,
                transform_metadata=dict(page.metadata),
                selection=state.selection.clear(),
                bulk=state.bulk.close_popover(),
            )
        case FetchFailed():
            return state
        case SelectionChanged(ids=ids):
            if state.bulk.state in (BulkState.CONFIRMING_DELETE, BulkState.SUBMITTING):
                LOG.debug("Ignoring selection change while %s", state.bulk.state)
                return state
            selection = state.selection.select(ids, available=state.transform_ids)
            if selection == state.selection:
                return state
            bulk = state.bulk.close_popover() if selection.is_empty() else state.bulk
            return replace(state, selection=selection, bulk=bulk)
        case ActionButtonClicked():
            return _with_bulk(state, event, state.bulk.toggle_popover(state.selection))
        case PopoverClosed():
            return _with_bulk(state, event, state.bulk.close_popover())
        case EditChosen():
            return _with_bulk(state, event, state.bulk.choose_edit(state.selection))
        case DeleteChosen():
            return _with_bulk(
                state, event, state.bulk.choose_delete(state.selection)
            )
        case DeleteCancelled():
            return _with_bulk(state, event, state.bulk.cancel())
        case DeleteConfirmed():
            return _with_bulk(state, event, state.bulk.confirm())
        case EnableClicked():
            return _with_bulk(
                state, event, state.bulk.submit(BulkAction.ENABLE, state.selection)
            )
        case DisableClicked():
            return _with_bulk(
                state, event, state.bulk.submit(BulkAction.DISABLE, state.selection)
            )
        case ActionSucceeded() | ActionFailed():
            return _with_bulk(state, event, state.bulk.resolve())
    raise TypeError(f"Unexpected event {event!r}")


def _with_query(state: ListViewState, query: ListQuery) -> ListViewState:
    if query == state.query:
        return state
    return replace(state, query=query)


def _with_bulk(
    state: ListViewState, event: Event, bulk: BulkActionController
) -> ListViewState:
    if bulk == state.bulk:
        LOG.debug("Ignoring %r in bulk state %s", event, state.bulk.state)
        return state
    return replace(state, bulk=bulk)


def _get_table_query(query: ListQuery, event: TableChanged) -> ListQuery:
    sort = (event.sort_field, SortDirection(event.sort_direction))
    if event.page_size == query.page_size and sort == (
        query.sort_field,
        query.sort_direction,
    ):
        return query.with_page(event.page_index)
    if event.page_size != query.page_size:
        query = query.with_page_size(event.page_size)
    return query.with_sort(*sort)
