#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Final, Optional
from urllib.parse import quote

import httpx

from xformview.config import ViewerConfig
from xformview.defaults import DEFAULT_API_URL, DEFAULT_TIMEOUT
from xformview.models import ServerResponse, Transform, TransformPage
from xformview.query import ListQuery

LOG = logging.getLogger(__name__)

TRANSFORM_BASE_PATH: Final = "/_plugins/_transform"


class HttpTransformService:
    """Transform operations on top of the OpenSearch transform REST API.

    Error responses of the cluster are returned as responses with
    `ok=False`. Transport errors, such as connection failures
    or timeouts, are raised as `httpx.HTTPError`.

    Args:
        api_url: Base URL of the cluster.
        headers: Extra HTTP headers, usually for authentication.
        timeout: Timeout for remote calls in seconds.
        transport: Optional transport, mainly used for testing.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=api_url,
            headers=dict(headers or {}),
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: ViewerConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "HttpTransformService":
        return cls(
            config.api_url or DEFAULT_API_URL,
            headers=config.auth_headers,
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "HttpTransformService":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def get_transforms(self, query: ListQuery) -> ServerResponse[TransformPage]:
        response = await self._request(
            "GET",
            TRANSFORM_BASE_PATH,
            params={
                "from": query.offset,
                "size": query.page_size,
                "search": query.search,
                "sortField": query.sort_field,
                "sortDirection": query.sort_direction.value,
            },
        )
        if response.is_error:
            return ServerResponse.failure(_get_error_reason(response))

        body = response.json()
        transforms = [Transform.model_validate(t) for t in body.get("transforms", [])]
        metadata: dict[str, Any] = {}
        if transforms:
            # The list API does not report job status,
            # it must be explained separately
            explain_response = await self._request(
                "GET", f"{_transform_path(t.id for t in transforms)}/_explain"
            )
            if explain_response.is_error:
                return ServerResponse.failure(_get_error_reason(explain_response))
            metadata = explain_response.json()

        return ServerResponse.success(
            TransformPage(
                transforms=transforms,
                total_transforms=body.get("total_transforms", len(transforms)),
                metadata=metadata,
            )
        )

    async def set_enabled(
        self, ids: Sequence[str], enabled: bool
    ) -> ServerResponse[bool]:
        operation = "_start" if enabled else "_stop"
        errors = []
        for transform_id in ids:
            response = await self._request(
                "POST", f"{_transform_path([transform_id])}/{operation}"
            )
            if response.is_error:
                errors.append(f"{transform_id}: {_get_error_reason(response)}")
        if errors:
            return ServerResponse.failure("; ".join(errors))
        return ServerResponse.success(True)

    async def delete_transforms(self, ids: Sequence[str]) -> ServerResponse[bool]:
        response = await self._request("DELETE", _transform_path(ids))
        if response.is_error:
            return ServerResponse.failure(_get_error_reason(response))
        body = response.json()
        if body.get("errors"):
            failed = [
                item["delete"].get("_id", "?")
                for item in body.get("items", [])
                if item.get("delete", {}).get("status", 200) >= 300
            ]
            return ServerResponse.failure(
                f"Failed to delete transform(s): {', '.join(failed)}"
            )
        return ServerResponse.success(True)

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        LOG.debug("%s %s", method, path)
        return await self._client.request(method, path, **kwargs)


def _transform_path(ids) -> str:
    return f"{TRANSFORM_BASE_PATH}/{','.join(quote(i, safe='') for i in ids)}"


def _get_error_reason(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("reason"):
            return str(error["reason"])
        if isinstance(error, str):
            return error
    text = response.text or response.reason_phrase
    return f"HTTP status {response.status_code}: {text}"
