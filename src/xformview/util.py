#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.


def get_error_message(error: BaseException | None, default: str) -> str:
    """Get a user-facing message for `error`, or `default` if it has none."""
    message = str(error) if error is not None else ""
    return message or default
