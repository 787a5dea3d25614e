"""
Tests for the Prometheus HTTP middleware.

Covers the endpoint label derived from the matched route and request
counting for routes mounted through nested routers.
"""

import pytest
from fastapi import APIRouter, FastAPI, Request
from httpx import ASGITransport, AsyncClient
from prometheus_client import REGISTRY

from worldcup_api.middlewares.prometheus import (
    UNMATCHED_ENDPOINT,
    PrometheusMiddleware,
    endpoint_label,
)


def request_with(scope_extra):
    scope = {"type": "http", "method": "GET", "path": "/", "headers": []}
    scope.update(scope_extra)
    return Request(scope)


class TestEndpointLabel:
    def test_matched_route_template(self):
        async def widget(widget_id: str):
            return {"id": widget_id}

        router = APIRouter()
        router.add_api_route("/widgets/{widget_id}", widget)

        request = request_with({"route": router.routes[0]})

        assert endpoint_label(request) == "/widgets/{widget_id}"

    def test_no_route_in_scope(self):
        assert endpoint_label(request_with({})) == UNMATCHED_ENDPOINT

    def test_route_without_path(self):
        request = request_with({"route": object()})

        assert endpoint_label(request) == UNMATCHED_ENDPOINT


def requests_total(endpoint, status_code):
    value = REGISTRY.get_sample_value(
        "http_requests_total",
        {"method": "GET", "endpoint": endpoint, "status_code": status_code},
    )
    return value or 0.0


@pytest.fixture
def nested_app():
    """App whose routes live two routers deep, like the real one."""
    inner = APIRouter()

    @inner.get("/gadgets/{gadget_id}")
    async def gadget(gadget_id: str):
        return {"id": gadget_id}

    outer = APIRouter()
    outer.include_router(inner)

    test_app = FastAPI()
    test_app.include_router(outer)
    test_app.add_middleware(PrometheusMiddleware)
    return test_app


class TestPrometheusMiddleware:
    @pytest.mark.asyncio
    async def test_nested_route_is_served_and_counted(self, nested_app):
        before = requests_total("/gadgets/{gadget_id}", "200")

        async with AsyncClient(
            transport=ASGITransport(app=nested_app), base_url="http://test"
        ) as ac:
            response = await ac.get("/gadgets/g-1")

        assert response.status_code == 200
        assert response.json() == {"id": "g-1"}
        assert requests_total("/gadgets/{gadget_id}", "200") == before + 1

    @pytest.mark.asyncio
    async def test_unknown_path_is_unmatched(self, nested_app):
        before = requests_total(UNMATCHED_ENDPOINT, "404")

        async with AsyncClient(
            transport=ASGITransport(app=nested_app), base_url="http://test"
        ) as ac:
            response = await ac.get("/no/such/path")

        assert response.status_code == 404
        assert requests_total(UNMATCHED_ENDPOINT, "404") == before + 1

    @pytest.mark.asyncio
    async def test_in_progress_returns_to_zero(self, nested_app):
        async with AsyncClient(
            transport=ASGITransport(app=nested_app), base_url="http://test"
        ) as ac:
            await ac.get("/gadgets/g-2")

        assert (
            REGISTRY.get_sample_value(
                "http_requests_in_progress", {"method": "GET"}
            )
            == 0.0
        )
