#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import param


class MessageNotifications(param.Parameterized):
    """Notifications that are shown as the latest message of a panel."""

    message = param.String(default="")

    def report_error(self, message: str) -> None:
        self.message = f"⚠️ {message}"

    def report_success(self, message: str) -> None:
        self.message = f"✅ {message}"
