from __future__ import annotations

import httpx
import pytest

from tv_display.config.models import DashboardApiConfig
from tv_display.core.errors import DataFeedError
from tv_display.data_feed.dashboard_client import DashboardClient
from tv_display.data_feed.records import DisplaySettings

BASE_URL = "http://dashboard.test"


def _client(handler) -> DashboardClient:
    session = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return DashboardClient(DashboardApiConfig(base_url=BASE_URL, backoff_base_sec=0), session=session)


def test_dashboard_client_should_fetch_current_rate() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/rates/current"
        return httpx.Response(
            200,
            json={
                "id": 2,
                "gold_24k_sale": 1,
                "gold_24k_purchase": 2,
                "gold_22k_sale": 3,
                "gold_22k_purchase": 4,
                "gold_18k_sale": 5,
                "gold_18k_purchase": 6,
                "silver_per_kg_sale": 7,
                "silver_per_kg_purchase": 8,
            },
        )

    snapshot = _client(handler).fetch_current_rate()
    assert snapshot is not None
    assert snapshot.silver_per_kg_purchase == 8.0


def test_dashboard_client_should_map_null_payloads() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"null", headers={"content-type": "application/json"})

    client = _client(handler)
    assert client.fetch_current_rate() is None
    assert client.fetch_banner_settings() is None
    assert client.fetch_display_settings() == DisplaySettings.defaults()
    assert client.fetch_active_media() == ()


def test_dashboard_client_should_request_active_collections() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path == "/api/promo":
            return httpx.Response(
                200,
                json=[
                    {"id": 5, "name": "late", "image_url": "/5.png", "order_index": 3},
                    {"id": 6, "name": "early", "image_url": "/6.png", "order_index": 1, "transition_effect": "zoom-in"},
                ],
            )
        return httpx.Response(200, json=[{"id": 1, "name": "m", "file_url": "/m.jpg", "media_type": "image"}])

    client = _client(handler)
    promos = client.fetch_active_promos()
    media = client.fetch_active_media()

    assert [promo.id for promo in promos] == [6, 5]
    assert len(media) == 1
    assert all(request.url.params["active"] == "true" for request in seen)


def test_dashboard_client_should_retry_then_raise() -> None:
    attempts = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        attempts["count"] += 1
        return httpx.Response(503, json={"message": "down"})

    with pytest.raises(DataFeedError):
        _client(handler).fetch_display_settings()
    assert attempts["count"] == 3


def test_dashboard_client_should_recover_after_transient_failure() -> None:
    attempts = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        attempts["count"] += 1
        if attempts["count"] == 1:
            return httpx.Response(500)
        return httpx.Response(200, json={"banner_image_url": "/b.png", "banner_height": 90})

    banner = _client(handler).fetch_banner_settings()
    assert banner is not None
    assert banner.banner_height == 90
    assert attempts["count"] == 2


def test_dashboard_client_should_reject_unexpected_payload_shape() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=["not", "a", "mapping"])

    with pytest.raises(DataFeedError):
        _client(handler).fetch_current_rate()
