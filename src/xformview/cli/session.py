#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from collections.abc import Sequence
from typing import Callable, Optional

import click
import typer

from xformview.bulk import BulkAction
from xformview.controller import ListViewController
from xformview.router import MemoryRouter
from xformview.service import TransformService


class ConsoleNotifications:
    """Notifications printed to the console; errors are remembered."""

    def __init__(self):
        self.errors: list[str] = []

    def report_error(self, message: str) -> None:
        self.errors.append(message)
        typer.echo(f"Error: {message}", err=True)

    def report_success(self, message: str) -> None:
        typer.echo(message)


async def run_session(
    service: TransformService,
    location: str,
    *,
    page_size: int,
    debounce_window: float,
    select: Sequence[str] = (),
    action: Optional[BulkAction] = None,
    confirm_delete: Optional[Callable[[Sequence[str]], bool]] = None,
) -> tuple[ListViewController, ConsoleNotifications]:
    """Load the list page at `location` and optionally run a bulk action.

    Args:
        service: The transform service.
        location: The query string of the list page.
        page_size: Default page size.
        debounce_window: Debounce window for list fetches in seconds.
        select: Identifiers of the transforms to select.
            All of them must be listed on the loaded page.
        action: Bulk action applied to the selected transforms.
        confirm_delete: Called with the identifiers to be deleted;
            deletion is cancelled if it returns `False`.
    """
    notifications = ConsoleNotifications()
    vm = ListViewController(
        service,
        notifications,
        MemoryRouter(location),
        page_size=page_size,
        debounce_window=debounce_window,
    )
    try:
        vm.mount()
        await vm.settle()
        if notifications.errors or action is None:
            return vm, notifications

        missing = [i for i in select if i not in vm.state.transform_ids]
        if missing:
            raise click.ClickException(
                f"Transform(s) not listed on the selected page: {', '.join(missing)}"
            )
        vm.on_selection_change(select)
        if action is BulkAction.ENABLE:
            vm.on_enable()
        elif action is BulkAction.DISABLE:
            vm.on_disable()
        else:
            vm.on_action_button_click()
            vm.show_delete_modal()
            if confirm_delete is None or confirm_delete(vm.state.bulk.target_ids):
                vm.on_click_delete()
            else:
                vm.close_delete_modal()
        await vm.settle()
        return vm, notifications
    finally:
        vm.close()
