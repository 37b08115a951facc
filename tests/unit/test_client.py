"""Unit tests for the gallery HTTP client, using httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from visions_gallery.ui.client import ApiError, ImagesClient
from visions_gallery.ui.models import FormFields

RECORD = {
    "id": 7,
    "url": "https://x/y.png",
    "title": "T",
    "description": "D",
    "created_at": "2024-05-01T12:00:00Z",
}


def make_client(handler) -> ImagesClient:
    http = httpx.Client(base_url="http://gallery.test", transport=httpx.MockTransport(handler))
    return ImagesClient(http=http)


class TestRequests:
    """Each method hits the right route with the right body."""

    def test_list_images(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, request.url.path))
            return httpx.Response(200, json=[RECORD])

        records = make_client(handler).list_images()

        assert seen == [("GET", "/api/images")]
        assert [r.id for r in records] == [7]
        assert records[0].title == "T"

    def test_create_image_sends_form_fields(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json=RECORD)

        created = make_client(handler).create_image(FormFields("https://x/y.png", "T", "D"))

        assert bodies == [{"url": "https://x/y.png", "title": "T", "description": "D"}]
        assert created.id == 7

    def test_update_image(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, request.url.path, json.loads(request.content)))
            return httpx.Response(200, json={"success": True})

        make_client(handler).update_image(7, FormFields("https://x/z.png"))

        assert seen == [
            ("PUT", "/api/images/7", {"url": "https://x/z.png", "title": None, "description": None})
        ]

    def test_delete_image(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, request.url.path))
            return httpx.Response(200, json={"success": True})

        make_client(handler).delete_image(7)

        assert seen == [("DELETE", "/api/images/7")]


class TestErrors:
    """Failures surface as ApiError."""

    def test_error_status_raises_with_detail(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"detail": "URL is required"})

        with pytest.raises(ApiError) as exc_info:
            make_client(handler).create_image(FormFields())

        assert exc_info.value.status_code == 400
        assert "URL is required" in str(exc_info.value)

    def test_non_json_error_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        with pytest.raises(ApiError) as exc_info:
            make_client(handler).list_images()

        assert exc_info.value.status_code == 502
        assert "Bad Gateway" in str(exc_info.value)

    def test_transport_failure_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ApiError) as exc_info:
            make_client(handler).list_images()

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_context_manager_closes_http_client():
    http = httpx.Client(
        base_url="http://gallery.test",
        transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[])),
    )
    with ImagesClient(http=http) as client:
        assert client.list_images() == []
    assert http.is_closed
