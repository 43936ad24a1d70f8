#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from .app import create_app
from .notifications import MessageNotifications
from .router import LocationRouter
from .view import TransformsPanelView

__all__ = [
    "LocationRouter",
    "MessageNotifications",
    "TransformsPanelView",
    "create_app",
]
