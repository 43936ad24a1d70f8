#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class SelectionTracker:
    """The identifiers of the currently selected rows.

    A selection is immutable. `select()` replaces the previous selection
    as a whole, like a table's "selection changed" callback does.
    """

    ids: tuple[str, ...] = ()

    def select(
        self, ids: Iterable[str], available: Iterable[str] | None = None
    ) -> "SelectionTracker":
        """Select the given `ids`.

        Args:
            ids: The identifiers to select, duplicates are ignored.
            available: If given, identifiers not contained in it are
                dropped, so the selection never references rows
                that are not displayed.
        """
        allowed = set(available) if available is not None else None
        selected = [i for i in dict.fromkeys(ids) if allowed is None or i in allowed]
        return SelectionTracker(tuple(selected))

    def clear(self) -> "SelectionTracker":
        return SelectionTracker()

    def is_empty(self) -> bool:
        return not self.ids

    def __len__(self) -> int:
        return len(self.ids)

    def __contains__(self, item: object) -> bool:
        return item in self.ids

    @property
    def single_id(self) -> str | None:
        """The selected identifier if exactly one row is selected."""
        return self.ids[0] if len(self.ids) == 1 else None
