#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import json

import httpx
import pytest

from xformview.config import ViewerConfig
from xformview.query import ListQuery, SortDirection
from xformview.services import HttpTransformService

TRANSFORM_A = {
    "_id": "a",
    "_seq_no": 3,
    "_primary_term": 1,
    "transform": {
        "transform_id": "a",
        "description": "",
        "source_index": "logs",
        "target_index": "logs-summary",
        "enabled": True,
        "schedule": {"interval": {"period": 1, "unit": "Minutes"}},
    },
}
TRANSFORM_B = {
    "_id": "b c",
    "_seq_no": 4,
    "_primary_term": 1,
    "transform": {
        "source_index": "metrics",
        "target_index": "metrics-summary",
        "enabled": False,
    },
}


class RecordingHandler:
    def __init__(self, routes):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.raw_path.decode().partition("?")[0])
        status, body = self.routes[key]
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)


def new_service(routes, **kwargs):
    handler = RecordingHandler(routes)
    service = HttpTransformService(
        "http://cluster:9200", transport=httpx.MockTransport(handler), **kwargs
    )
    return service, handler


@pytest.mark.asyncio
async def test_get_transforms():
    service, handler = new_service(
        {
            ("GET", "/_plugins/_transform"): (
                200,
                {"total_transforms": 12, "transforms": [TRANSFORM_A, TRANSFORM_B]},
            ),
            ("GET", "/_plugins/_transform/a,b%20c/_explain"): (
                200,
                {"a": {"transform_metadata": {"status": "started"}}},
            ),
        }
    )
    async with service:
        response = await service.get_transforms(
            ListQuery(
                offset=10,
                page_size=10,
                search="logs",
                sort_field="transform.source_index",
                sort_direction=SortDirection.DESC,
            )
        )

    assert response.ok
    page = response.response
    assert [t.id for t in page.transforms] == ["a", "b c"]
    assert page.transforms[0].seq_no == 3
    assert page.transforms[1].enabled is False
    assert page.total_transforms == 12
    assert page.metadata == {"a": {"transform_metadata": {"status": "started"}}}

    assert dict(handler.requests[0].url.params) == {
        "from": "10",
        "size": "10",
        "search": "logs",
        "sortField": "transform.source_index",
        "sortDirection": "desc",
    }


@pytest.mark.asyncio
async def test_get_transforms_empty_skips_explain():
    service, handler = new_service(
        {("GET", "/_plugins/_transform"): (200, {"total_transforms": 0})}
    )
    response = await service.get_transforms(ListQuery())
    await service.aclose()

    assert response.ok
    assert response.response.transforms == []
    assert len(handler.requests) == 1


@pytest.mark.asyncio
async def test_get_transforms_error():
    service, _ = new_service(
        {
            ("GET", "/_plugins/_transform"): (
                403,
                {"error": {"reason": "no permissions for [cluster:admin]"}},
            )
        }
    )
    response = await service.get_transforms(ListQuery())
    await service.aclose()

    assert not response.ok
    assert response.error == "no permissions for [cluster:admin]"


@pytest.mark.asyncio
async def test_set_enabled():
    service, handler = new_service(
        {
            ("POST", "/_plugins/_transform/a/_start"): (200, {"acknowledged": True}),
            ("POST", "/_plugins/_transform/b/_start"): (
                404,
                {"error": "transform not found"},
            ),
            ("POST", "/_plugins/_transform/a/_stop"): (200, {"acknowledged": True}),
        }
    )
    async with service:
        response = await service.set_enabled(["a"], False)
        assert response.ok

        response = await service.set_enabled(["a", "b"], True)
        assert not response.ok
        assert response.error == "b: transform not found"

    assert [r.method for r in handler.requests] == ["POST", "POST", "POST"]


@pytest.mark.asyncio
async def test_delete_transforms():
    service, handler = new_service(
        {
            ("DELETE", "/_plugins/_transform/a,b"): (
                200,
                {
                    "errors": False,
                    "items": [
                        {"delete": {"_id": "a", "status": 200}},
                        {"delete": {"_id": "b", "status": 200}},
                    ],
                },
            ),
        }
    )
    async with service:
        response = await service.delete_transforms(["a", "b"])
    assert response.ok
    assert handler.requests[0].method == "DELETE"


@pytest.mark.asyncio
async def test_delete_transforms_partially_failed():
    service, _ = new_service(
        {
            ("DELETE", "/_plugins/_transform/a,b"): (
                200,
                {
                    "errors": True,
                    "items": [
                        {"delete": {"_id": "a", "status": 200}},
                        {"delete": {"_id": "b", "status": 404}},
                    ],
                },
            ),
        }
    )
    async with service:
        response = await service.delete_transforms(["a", "b"])
    assert not response.ok
    assert response.error == "Failed to delete transform(s): b"


@pytest.mark.asyncio
async def test_error_without_json_body():
    service, _ = new_service(
        {("DELETE", "/_plugins/_transform/a"): (502, "Bad gateway")}
    )
    async with service:
        response = await service.delete_transforms(["a"])
    assert response.error == "HTTP status 502: Bad gateway"


@pytest.mark.asyncio
async def test_transport_error_is_raised():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    service = HttpTransformService(
        "http://cluster:9200", transport=httpx.MockTransport(handler)
    )
    async with service:
        with pytest.raises(httpx.ConnectError):
            await service.get_transforms(ListQuery())


@pytest.mark.asyncio
async def test_from_config_sends_auth_headers():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, content=json.dumps({"transforms": []}))

    config = ViewerConfig(
        api_url="http://cluster:9200", auth_type="token", token="t0k3n"
    )
    service = HttpTransformService.from_config(
        config, transport=httpx.MockTransport(handler)
    )
    async with service:
        await service.get_transforms(ListQuery())

    assert requests[0].headers["X-Auth-Token"] == "t0k3n"
    assert str(requests[0].url).startswith("http://cluster:9200/_plugins/_transform")
