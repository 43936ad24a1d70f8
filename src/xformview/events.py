#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from dataclasses import dataclass
from typing import TypeAlias

from .bulk import BulkAction
from .models import TransformPage
from .query import ListQuery, SortDirection

# ---- query events ----


@dataclass(frozen=True)
class Mounted:
    query: ListQuery


@dataclass(frozen=True)
class SearchChanged:
    search: str


@dataclass(frozen=True)
class SortChanged:
    sort_field: str
    sort_direction: SortDirection | str


@dataclass(frozen=True)
class PageClicked:
    page_index: int


@dataclass(frozen=True)
class PageSizeChanged:
    page_size: int


@dataclass(frozen=True)
class TableChanged:
    """A table's combined page and sort change."""

    page_index: int
    page_size: int
    sort_field: str
    sort_direction: SortDirection | str


@dataclass(frozen=True)
class FiltersReset:
    pass


# ---- fetch events ----


@dataclass(frozen=True)
class FetchingChanged:
    fetching: bool


@dataclass(frozen=True)
class FetchSucceeded:
    page: TransformPage


@dataclass(frozen=True)
class FetchFailed:
    error: str


# ---- selection and bulk action events ----


@dataclass(frozen=True)
class SelectionChanged:
    ids: tuple[str, ...]


@dataclass(frozen=True)
class ActionButtonClicked:
    pass


@dataclass(frozen=True)
class PopoverClosed:
    pass


@dataclass(frozen=True)
class EditChosen:
    pass


@dataclass(frozen=True)
class DeleteChosen:
    pass


@dataclass(frozen=True)
class DeleteCancelled:
    pass


@dataclass(frozen=True)
class DeleteConfirmed:
    pass


@dataclass(frozen=True)
class EnableClicked:
    pass


@dataclass(frozen=True)
class DisableClicked:
    pass


@dataclass(frozen=True)
class ActionSucceeded:
    action: BulkAction


@dataclass(frozen=True)
class ActionFailed:
    action: BulkAction
    error: str


Event: TypeAlias = (
    Mounted
    | SearchChanged
    | SortChanged
    | PageClicked
    | PageSizeChanged
    | TableChanged
    | FiltersReset
    | FetchingChanged
    | FetchSucceeded
    | FetchFailed
    | SelectionChanged
    | ActionButtonClicked
    | PopoverClosed
    | EditChosen
    | DeleteChosen
    | DeleteCancelled
    | DeleteConfirmed
    | EnableClicked
    | DisableClicked
    | ActionSucceeded
    | ActionFailed
)
