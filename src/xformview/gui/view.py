#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import warnings

import panel as pn

from xformview.controller import ListViewController
from xformview.query import PAGE_SIZE_OPTIONS, SORT_FIELDS, ListQuery, SortDirection
from xformview.rendering import COLUMNS
from xformview.state import ListViewState

from .notifications import MessageNotifications

SORT_FIELD_LABELS = dict(
    zip(
        ("Name", "Source index", "Target index", "Job state"),
        SORT_FIELDS,
    )
)


class TransformsPanelView(pn.viewable.Viewer):
    def __init__(self, vm: ListViewController, notifications: MessageNotifications):
        super().__init__()
        self.vm = vm
        self._syncing = False

        query = vm.query
        self.search_input = pn.widgets.TextInput(
            placeholder="Search", value=query.search, sizing_mode="stretch_width"
        )
        self.search_input.param.watch(self._on_search_input_changed, "value_input")
        self.sort_field_select = pn.widgets.Select(
            name="Sort by", options=SORT_FIELD_LABELS, value=query.sort_field
        )
        self.sort_direction_select = pn.widgets.RadioButtonGroup(
            options=[d.value for d in SortDirection], value=query.sort_direction.value
        )
        for widget in (self.sort_field_select, self.sort_direction_select):
            widget.param.watch(self._on_sort_widget_changed, "value")
        self.page_size_select = pn.widgets.Select(
            name="Rows per page", options=list(PAGE_SIZE_OPTIONS), value=query.page_size
        )
        self.page_size_select.param.watch(self._on_page_size_changed, "value")

        self.table = _create_transforms_table(vm)
        self.table.param.watch(lambda e: vm.set_selection(e.new), "selection")
        vm.param.watch(self._on_state_changed, "state")

        self.view = pn.Column(
            pn.Row(
                pn.pane.Markdown(vm.param.title),
                pn.widgets.Button(
                    name="Disable",
                    disabled=vm.param.disable_disabled,
                    on_click=lambda _: vm.on_disable(),
                ),
                pn.widgets.Button(
                    name="Enable",
                    disabled=vm.param.enable_disabled,
                    on_click=lambda _: vm.on_enable(),
                ),
                pn.widgets.Button(
                    name="Actions ▾",
                    disabled=vm.param.actions_disabled,
                    on_click=lambda _: vm.on_action_button_click(),
                ),
                pn.widgets.Button(
                    name="Create transform job",
                    button_type="primary",
                    on_click=lambda _: vm.on_click_create(),
                ),
            ),
            pn.Row(
                pn.widgets.Button(
                    name="Edit",
                    disabled=vm.param.edit_disabled,
                    on_click=lambda _: vm.on_click_edit(),
                ),
                pn.widgets.Button(
                    name="Delete",
                    button_type="danger",
                    disabled=vm.param.delete_disabled,
                    on_click=lambda _: vm.show_delete_modal(),
                ),
                pn.widgets.Button(name="✕", on_click=lambda _: vm.close_popover()),
                visible=vm.param.popover_open,
            ),
            pn.Row(
                self.search_input,
                self.sort_field_select,
                self.sort_direction_select,
                self.page_size_select,
            ),
            pn.Row(
                pn.widgets.Button(
                    name="◀", on_click=lambda _: self._on_page_step(-1)
                ),
                pn.pane.Markdown(pn.bind(_page_label, vm.param.state)),
                pn.widgets.Button(
                    name="▶", on_click=lambda _: self._on_page_step(1)
                ),
                visible=vm.param.pagination_visible,
            ),
            self.table,
            pn.pane.Markdown(
                pn.bind(_empty_prompt, vm.param.state, vm.param.empty_message)
            ),
            pn.Column(
                pn.pane.Markdown(pn.bind(_delete_prompt, vm.param.state)),
                pn.Row(
                    pn.widgets.Button(
                        name="Cancel", on_click=lambda _: vm.close_delete_modal()
                    ),
                    pn.widgets.Button(
                        name="Delete",
                        button_type="danger",
                        on_click=lambda _: vm.on_click_delete(),
                    ),
                ),
                visible=vm.param.delete_modal_visible,
            ),
            pn.indicators.LoadingSpinner(
                value=vm.param.fetching, visible=vm.param.fetching, size=20
            ),
            pn.pane.Markdown(notifications.param.message),
        )

    def __panel__(self):
        return self.view

    def _on_search_input_changed(self, event):
        if not self._syncing:
            self.vm.on_search_change(event.new)

    def _on_sort_widget_changed(self, _event):
        if not self._syncing:
            self.vm.on_sort_change(
                self.sort_field_select.value, self.sort_direction_select.value
            )

    def _on_page_size_changed(self, event):
        if not self._syncing:
            self.vm.on_page_size_change(event.new)

    def _on_page_step(self, step: int):
        page_index = self.vm.page_index + step
        if 0 <= page_index < self.vm.page_count:
            self.vm.on_page_click(page_index)

    def _on_state_changed(self, event):
        try:
            if event.new.query != event.old.query:
                self._sync_query_widgets(event.new.query)
            selected_indices = self.vm.selected_indices()
            if self.table.selection != selected_indices:
                self.table.selection = selected_indices
        except Exception as e:
            warnings.warn(f"Error updating transforms view: {e}")

    def _sync_query_widgets(self, query: ListQuery):
        # Widgets follow the query, e.g. after it was read from the location
        self._syncing = True
        try:
            if self.search_input.value_input != query.search:
                self.search_input.param.update(
                    value=query.search, value_input=query.search
                )
            self.sort_field_select.value = query.sort_field
            self.sort_direction_select.value = query.sort_direction.value
            self.page_size_select.value = query.page_size
        finally:
            self._syncing = False


def _page_label(state: ListViewState) -> str:
    pagination = state.pagination
    return f"Page {pagination.page_index + 1} of {pagination.page_count}"


def _empty_prompt(state: ListViewState, empty_message: str) -> str:
    return "" if state.transforms else empty_message


def _delete_prompt(state: ListViewState) -> str:
    ids = ", ".join(f"`{i}`" for i in state.bulk.target_ids)
    return f"**Delete transform job(s)?** {ids} will be deleted permanently."


def _create_transforms_table(vm: ListViewController):
    return pn.widgets.Tabulator(
        vm.dataframe,
        theme="default",
        layout="fit_data",
        show_index=False,
        selectable="checkbox",
        editors={},  # No editing
        disabled=True,
        titles=COLUMNS,
        # Sorting is done remotely through the sort widgets
        configuration={"columnDefaults": {"headerSort": False}},
        sizing_mode="stretch_width",
    )
