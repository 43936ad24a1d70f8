#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from .bulk import BulkAction, BulkActionController, BulkState, ModalState
from .config import ViewerConfig
from .controller import ListViewController
from .fetcher import DebouncedFetcher
from .models import ServerResponse, Transform, TransformPage, TransformSpec
from .notifications import Notifications
from .paginator import (
    Pagination,
    offset_for_page,
    page_count,
    page_index,
    validated_offset,
)
from .query import ListQuery, SortDirection, query_from_url, query_to_url
from .router import ROUTES, MemoryRouter, Router
from .selection import SelectionTracker
from .service import TransformService
from .state import ListViewState
from .version import __version__

__all__ = [
    "BulkAction",
    "BulkActionController",
    "BulkState",
    "DebouncedFetcher",
    "ListQuery",
    "ListViewController",
    "ListViewState",
    "MemoryRouter",
    "ModalState",
    "Notifications",
    "Pagination",
    "ROUTES",
    "Router",
    "SelectionTracker",
    "ServerResponse",
    "SortDirection",
    "Transform",
    "TransformPage",
    "TransformService",
    "TransformSpec",
    "ViewerConfig",
    "__version__",
    "offset_for_page",
    "page_count",
    "page_index",
    "query_from_url",
    "query_to_url",
    "validated_offset",
]
