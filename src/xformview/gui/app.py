#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import panel as pn

from xformview.config import ViewerConfig
from xformview.controller import ListViewController
from xformview.router import MemoryRouter, Router
from xformview.service import TransformService

from .notifications import MessageNotifications
from .router import LocationRouter
from .view import TransformsPanelView


def create_app(
    service: TransformService, config: ViewerConfig | None = None
) -> TransformsPanelView:
    """Create the transforms list for the current Panel session.

    The list is mounted once the session's document has loaded.
    """
    config = config or ViewerConfig.create()
    notifications = MessageNotifications()
    router: Router = (
        LocationRouter(pn.state.location)
        if pn.state.location is not None
        else MemoryRouter()
    )
    vm = ListViewController(
        service,
        notifications,
        router,
        page_size=config.effective_page_size,
        debounce_window=config.debounce_window,
    )
    view = TransformsPanelView(vm, notifications)
    pn.state.onload(vm.mount)
    return view
