#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from .http import HttpTransformService
from .memory import MemoryTransformService

__all__ = [
    "HttpTransformService",
    "MemoryTransformService",
]
