#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Final
from urllib.parse import parse_qs, urlencode

from .defaults import (
    DEFAULT_FROM,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PAGE_SIZE_OPTIONS,
    DEFAULT_SEARCH,
    DEFAULT_SORT_DIRECTION,
    DEFAULT_SORT_FIELD,
)
from .paginator import offset_for_page, page_index


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


SORT_FIELDS: Final = (
    "_id",
    "transform.source_index",
    "transform.target_index",
    "transform.enabled",
)
PAGE_SIZE_OPTIONS: Final = DEFAULT_PAGE_SIZE_OPTIONS

# Keys of the browsable URL's query string
FROM_KEY: Final = "from"
SIZE_KEY: Final = "size"
SEARCH_KEY: Final = "search"
SORT_FIELD_KEY: Final = "sortField"
SORT_DIRECTION_KEY: Final = "sortDirection"

_DIGITS: Final = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class ListQuery:
    """The canonical query of the transforms list.

    The `offset` is not required to be a multiple of `page_size`,
    the page index is always derived from both.

    All `with_...()` methods return a new query with one aspect changed.
    Any change other than a page change resets the offset to zero,
    because the previous page position is no longer meaningful.
    """

    offset: int = DEFAULT_FROM
    page_size: int = DEFAULT_PAGE_SIZE
    search: str = DEFAULT_SEARCH
    sort_field: str = DEFAULT_SORT_FIELD
    sort_direction: SortDirection = SortDirection(DEFAULT_SORT_DIRECTION)

    @property
    def page_index(self) -> int:
        return page_index(self.offset, self.page_size)

    @property
    def is_filtered(self) -> bool:
        return bool(self.search)

    def with_search(self, search: str) -> "ListQuery":
        return replace(self, search=search, offset=0)

    def with_sort(
        self, sort_field: str, sort_direction: SortDirection | str
    ) -> "ListQuery":
        if sort_field not in SORT_FIELDS:
            raise ValueError(f"Field {sort_field!r} is not sortable.")
        return replace(
            self,
            sort_field=sort_field,
            sort_direction=SortDirection(sort_direction),
            offset=0,
        )

    def with_page(self, index: int) -> "ListQuery":
        if index < 0:
            raise ValueError(f"Page index must not be negative, was {index}.")
        return replace(self, offset=offset_for_page(index, self.page_size))

    def with_page_size(self, page_size: int) -> "ListQuery":
        if page_size not in PAGE_SIZE_OPTIONS:
            raise ValueError(
                f"Page size must be one of {PAGE_SIZE_OPTIONS}, was {page_size}."
            )
        return replace(self, page_size=page_size, offset=0)

    def to_params(self) -> dict[str, str]:
        """Get the query as URL query parameters, sorted by key."""
        return {
            FROM_KEY: str(self.offset),
            SEARCH_KEY: self.search,
            SIZE_KEY: str(self.page_size),
            SORT_DIRECTION_KEY: self.sort_direction.value,
            SORT_FIELD_KEY: self.sort_field,
        }


def query_from_url(
    query_string: str | None, default_page_size: int = DEFAULT_PAGE_SIZE
) -> ListQuery:
    """Parse a URL query string into a list query.

    Missing, unknown or malformed values are replaced by defaults,
    this function never fails.

    Args:
        query_string: The query string, with or without leading `?`.
        default_page_size: Page size used if the query string
            provides no valid one.
    """
    params = parse_qs((query_string or "").lstrip("?"), keep_blank_values=True)

    def get(key: str) -> str | None:
        values = params.get(key)
        return values[0] if values else None

    sort_direction = get(SORT_DIRECTION_KEY)
    sort_field = get(SORT_FIELD_KEY)
    return ListQuery(
        offset=_parse_int(get(FROM_KEY), DEFAULT_FROM, lambda v: v >= 0),
        page_size=_parse_int(
            get(SIZE_KEY), default_page_size, lambda v: v in PAGE_SIZE_OPTIONS
        ),
        search=get(SEARCH_KEY) or DEFAULT_SEARCH,
        sort_field=sort_field if sort_field in SORT_FIELDS else DEFAULT_SORT_FIELD,
        sort_direction=SortDirection(
            sort_direction
            if sort_direction in {d.value for d in SortDirection}
            else DEFAULT_SORT_DIRECTION
        ),
    )


def query_to_url(query: ListQuery) -> str:
    """Format a list query as URL query string, without leading `?`."""
    return urlencode(query.to_params())


def _parse_int(value: str | None, default: int, is_valid: Callable[[int], bool]):
    # int() also accepts underscores, whitespace and non-ASCII digits
    if value is None or not _DIGITS.fullmatch(value):
        return default
    number = int(value)
    return number if is_valid(number) else default
