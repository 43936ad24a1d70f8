#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .bulk import BulkActionController, BulkState
from .models import Transform
from .paginator import Pagination
from .query import ListQuery
from .selection import SelectionTracker


@dataclass(frozen=True)
class ListViewState:
    """Immutable state of the transforms list.

    A new state is derived from the previous one for every event,
    see `xformview.reducer.reduce()`.
    """

    query: ListQuery = field(default_factory=ListQuery)
    transforms: tuple[Transform, ...] = ()
    total_transforms: int = 0
    transform_metadata: Mapping[str, Any] = field(default_factory=dict)
    selection: SelectionTracker = field(default_factory=SelectionTracker)
    bulk: BulkActionController = field(default_factory=BulkActionController)
    fetching: bool = False

    @property
    def transform_ids(self) -> tuple[str, ...]:
        return tuple(t.id for t in self.transforms)

    @property
    def pagination(self) -> Pagination:
        return Pagination.create(self.query, self.total_transforms)

    # ---- control enablement ----

    @property
    def can_enable(self) -> bool:
        return self._can_submit

    @property
    def can_disable(self) -> bool:
        return self._can_submit

    @property
    def can_open_actions(self) -> bool:
        return not self.selection.is_empty() and not self.bulk.is_submitting

    @property
    def can_edit(self) -> bool:
        return self.selection.single_id is not None and not self.bulk.is_submitting

    @property
    def can_delete(self) -> bool:
        return not self.selection.is_empty() and not self.bulk.is_submitting

    @property
    def _can_submit(self) -> bool:
        # Not while a deletion waits for confirmation or any action runs
        return not self.selection.is_empty() and self.bulk.state in (
            BulkState.IDLE,
            BulkState.POPOVER_OPEN,
        )
