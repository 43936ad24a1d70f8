#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

from collections.abc import Mapping, Sequence
from typing import Any, Final

import pandas as pd

from .models import Transform

TRANSFORM_STATUS_LABELS: Final = {
    "started": "Started",
    "stopped": "Stopped",
    "finished": "Complete",
    "failed": "Failed",
    "init": "Initializing",
}

COLUMNS: Final = {
    "name": "Name",
    "source_index": "Source index",
    "target_index": "Target index",
    "job_state": "Job state",
    "status": "Transform job status",
}

LOADING_MESSAGE: Final = "Loading transforms..."
NO_MATCHES_MESSAGE: Final = (
    "There are no transforms matching your applied filters. "
    "Reset your filters to view your transforms."
)
NO_TRANSFORMS_MESSAGE: Final = (
    "Transform jobs help you create a materialized view on top of "
    "existing data. Create a transform job to get started."
)


def render_enabled(enabled: bool) -> str:
    return "Enabled" if enabled else "Disabled"


def render_status(metadata: Mapping[str, Any] | None) -> str:
    """Render the status found in a transform's `_explain` metadata."""
    if not metadata:
        return "-"
    transform_metadata = metadata.get("transform_metadata") or {}
    status = transform_metadata.get("status")
    if status is None:
        return "-"
    label = TRANSFORM_STATUS_LABELS.get(status, str(status).capitalize())
    failure_reason = transform_metadata.get("failure_reason")
    return f"{label}: {failure_reason}" if failure_reason else label


def render_title(transforms: Sequence[Transform]) -> str:
    return f"Transform jobs ({len(transforms)})"


def empty_prompt(filter_is_applied: bool, loading: bool) -> str:
    """Get the text shown instead of an empty list."""
    if loading:
        return LOADING_MESSAGE
    if filter_is_applied:
        return NO_MATCHES_MESSAGE
    return NO_TRANSFORMS_MESSAGE


def transforms_to_dataframe(
    transforms: Sequence[Transform], metadata: Mapping[str, Any] | None = None
) -> pd.DataFrame:
    metadata = metadata or {}
    return pd.DataFrame(
        [_transform_to_dataframe_row(t, metadata.get(t.id)) for t in transforms],
        columns=list(COLUMNS),
    )


def _transform_to_dataframe_row(transform: Transform, metadata: Any):
    return {
        "name": transform.id,
        "source_index": transform.source_index,
        "target_index": transform.target_index,
        "job_state": render_enabled(transform.enabled),
        "status": render_status(metadata),
    }
