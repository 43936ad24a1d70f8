#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from typing import Protocol


class Notifications(Protocol):
    """Fire-and-forget sink for messages shown to the user."""

    def report_error(self, message: str) -> None: ...

    def report_success(self, message: str) -> None: ...
