#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .defaults import DEFAULT_PAGE_SIZE_OPTIONS

if TYPE_CHECKING:
    from .query import ListQuery


def page_index(offset: int, page_size: int) -> int:
    """Get the zero-based index of the page that contains `offset`."""
    return offset // page_size


def page_count(total_count: int, page_size: int) -> int:
    """Get the number of pages needed for `total_count` items.

    The result is at least one, even for an empty collection,
    so that pagination widgets stay stable.
    """
    return max(1, (total_count + page_size - 1) // page_size)


def offset_for_page(index: int, page_size: int) -> int:
    """Get the offset of the first item on the page with given `index`."""
    return index * page_size


def validated_offset(offset: int, page_size: int, total_count: int) -> int:
    """Get an offset that refers to an existing page.

    Offsets past the last item, for example after deleting all items of
    the last page, are moved to the start of the last page.
    """
    if 0 <= offset < total_count:
        return offset
    if offset < 0:
        return 0
    return offset_for_page(page_count(total_count, page_size) - 1, page_size)


@dataclass(frozen=True)
class Pagination:
    """Pagination settings as needed by table and pagination widgets."""

    page_index: int
    page_size: int
    total_item_count: int
    page_count: int
    page_size_options: tuple[int, ...] = DEFAULT_PAGE_SIZE_OPTIONS

    @classmethod
    def create(cls, query: "ListQuery", total_item_count: int) -> "Pagination":
        return Pagination(
            page_index=page_index(query.offset, query.page_size),
            page_size=query.page_size,
            total_item_count=total_item_count,
            page_count=page_count(total_item_count, query.page_size),
        )

    @property
    def is_visible(self) -> bool:
        """Whether a pagination widget needs to be shown at all."""
        return self.page_count > 1
