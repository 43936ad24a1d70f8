#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from dataclasses import dataclass
from enum import Enum

from .selection import SelectionTracker


class BulkState(str, Enum):
    IDLE = "idle"
    POPOVER_OPEN = "popover_open"
    CONFIRMING_DELETE = "confirming_delete"
    SUBMITTING = "submitting"


class BulkAction(str, Enum):
    ENABLE = "enable"
    DISABLE = "disable"
    DELETE = "delete"


class ModalState(str, Enum):
    HIDDEN = "hidden"
    CONFIRM_DELETE = "confirm_delete"


@dataclass(frozen=True)
class BulkActionController:
    """State machine for the bulk actions applied to selected transforms.

    ```
    IDLE --toggle_popover--> POPOVER_OPEN --close_popover--> IDLE
    POPOVER_OPEN --choose_edit--> IDLE
    POPOVER_OPEN --choose_delete--> CONFIRMING_DELETE --cancel--> IDLE
    CONFIRMING_DELETE --confirm--> SUBMITTING --resolve--> IDLE
    IDLE --submit(enable|disable)--> SUBMITTING
    POPOVER_OPEN --submit(enable|disable)--> SUBMITTING
    ```

    Every transition returns a new instance. Transitions that are not
    possible in the current state, or not possible for the given
    selection, return the instance unchanged.
    """

    state: BulkState = BulkState.IDLE
    action: BulkAction | None = None
    target_ids: tuple[str, ...] = ()

    @property
    def is_popover_open(self) -> bool:
        return self.state is BulkState.POPOVER_OPEN

    @property
    def is_submitting(self) -> bool:
        return self.state is BulkState.SUBMITTING

    @property
    def modal(self) -> ModalState:
        if self.state is BulkState.CONFIRMING_DELETE:
            return ModalState.CONFIRM_DELETE
        return ModalState.HIDDEN

    def toggle_popover(self, selection: SelectionTracker) -> "BulkActionController":
        if self.state is BulkState.POPOVER_OPEN:
            return BulkActionController()
        if self.state is BulkState.IDLE and not selection.is_empty():
            return BulkActionController(BulkState.POPOVER_OPEN)
        return self

    def close_popover(self) -> "BulkActionController":
        if self.state is BulkState.POPOVER_OPEN:
            return BulkActionController()
        return self

    def choose_edit(self, selection: SelectionTracker) -> "BulkActionController":
        # Edit navigates away at once, there is nothing to confirm
        if self.state is BulkState.POPOVER_OPEN and selection.single_id is not None:
            return BulkActionController()
        return self

    def choose_delete(self, selection: SelectionTracker) -> "BulkActionController":
        if self.state is BulkState.POPOVER_OPEN and not selection.is_empty():
            return BulkActionController(
                BulkState.CONFIRMING_DELETE, BulkAction.DELETE, selection.ids
            )
        return self

    def cancel(self) -> "BulkActionController":
        if self.state is BulkState.CONFIRMING_DELETE:
            return BulkActionController()
        return self

    def confirm(self) -> "BulkActionController":
        if self.state is BulkState.CONFIRMING_DELETE:
            return BulkActionController(
                BulkState.SUBMITTING, self.action, self.target_ids
            )
        return self

    def submit(
        self, action: BulkAction, selection: SelectionTracker
    ) -> "BulkActionController":
        if action is BulkAction.DELETE:
            raise ValueError("Deletion must be chosen and confirmed.")
        # Enable and disable do not depend on the popover, submitting closes it
        if (
            self.state in (BulkState.IDLE, BulkState.POPOVER_OPEN)
            and not selection.is_empty()
        ):
            return BulkActionController(BulkState.SUBMITTING, action, selection.ids)
        return self

    def resolve(self) -> "BulkActionController":
        if self.state is BulkState.SUBMITTING:
            return BulkActionController()
        return self
