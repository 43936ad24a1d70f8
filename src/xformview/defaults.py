#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from pathlib import Path
from typing import Final

DEFAULT_CONFIG_PATH: Final = Path("~").expanduser() / ".xformview" / "config"
DEFAULT_API_URL: Final = "http://127.0.0.1:9200"
DEFAULT_AUTH_TYPE: Final = "none"

DEFAULT_FROM: Final = 0
DEFAULT_PAGE_SIZE: Final = 20
DEFAULT_PAGE_SIZE_OPTIONS: Final = (5, 10, 20, 50)
DEFAULT_SEARCH: Final = ""
DEFAULT_SORT_FIELD: Final = "_id"
DEFAULT_SORT_DIRECTION: Final = "asc"

# Debounce window for list fetches, in seconds
DEFAULT_DEBOUNCE_WINDOW: Final = 0.5
# Timeout for remote calls, in seconds
DEFAULT_TIMEOUT: Final = 30.0
