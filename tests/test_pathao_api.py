import json

import httpx
from fastapi.testclient import TestClient

from bakery_courier.config import PathaoSettings
from bakery_courier.main import create_app
from bakery_courier.services.pathao import PathaoClient, get_pathao_client

TOKEN_PATH = "/aladdin/api/v1/issue-token"


class FakePathao:
    def __init__(self, token=(200, {"access_token": "abc", "expires_in": 3600}), routes=None):
        self.token = token
        self.routes = routes or {}
        self.calls: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if request.url.path == TOKEN_PATH:
            status, body = self.token
        else:
            status, body = self.routes.get((request.method, request.url.path), (404, "not found"))
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)


def _api(fake: FakePathao, store_id=None) -> TestClient:
    settings = PathaoSettings(
        client_id="c", client_secret="s", username="u", password="p", base_url="https://fake", store_id=store_id
    )
    pathao = PathaoClient(settings, transport=httpx.MockTransport(fake.handler))
    app = create_app()
    app.dependency_overrides[get_pathao_client] = lambda: pathao
    return TestClient(app)


def test_root_and_health():
    client = _api(FakePathao())

    root = client.get("/")
    assert root.status_code == 200
    assert root.json()["status"] == "running"

    health = client.get("/api/health")
    assert health.status_code == 200
    assert health.json() == {"status": "ok"}


def test_cities_endpoint_returns_courier_list():
    fake = FakePathao(
        routes={("GET", "/aladdin/api/v1/city-list"): (200, {"data": {"data": [{"city_id": 1, "city_name": "Dhaka"}]}})}
    )
    client = _api(fake)

    response = client.get("/api/pathao/cities")

    assert response.status_code == 200
    assert response.json() == [{"city_id": 1, "city_name": "Dhaka"}]


def test_zone_area_and_store_endpoints():
    fake = FakePathao(
        routes={
            ("GET", "/aladdin/api/v1/cities/1/zone-list"): (200, {"data": {"data": [{"zone_id": 10}]}}),
            ("GET", "/aladdin/api/v1/zones/10/area-list"): (200, {"data": {"data": [{"area_id": 100}]}}),
            ("GET", "/aladdin/api/v1/stores"): (200, {"data": {}}),
        }
    )
    client = _api(fake)

    assert client.get("/api/pathao/zones/1").json() == [{"zone_id": 10}]
    assert client.get("/api/pathao/areas/10").json() == [{"area_id": 100}]
    assert client.get("/api/pathao/stores").json() == []
    # one token for all three lookups
    assert [request.url.path for request in fake.calls].count(TOKEN_PATH) == 1


def test_courier_auth_failure_surfaces_as_server_error():
    client = _api(FakePathao(token=(401, "invalid credentials")))

    response = client.get("/api/pathao/cities")

    assert response.status_code == 500
    detail = response.json()["detail"]
    assert "401" in detail
    assert "invalid credentials" in detail


def test_calculate_price_accepts_storefront_payload():
    fake = FakePathao(
        routes={
            ("POST", "/aladdin/api/v1/merchant/price-plan"): (
                200,
                {"data": {"price": 70, "cod_charge": 0, "promo_discount": 0, "total_fee": 70}},
            )
        }
    )
    client = _api(fake)

    response = client.post(
        "/api/pathao/calculate-price",
        json={"storeId": 7, "recipientCity": 1, "recipientZone": 10, "deliveryType": "normal", "itemType": "parcel"},
    )

    assert response.status_code == 200
    assert response.json() == {"price": 70, "cod_charge": 0, "promo_discount": 0, "total_price": 70}
    sent = json.loads(fake.calls[-1].content)
    assert sent["store_id"] == 7
    assert sent["delivery_type"] == 48
    assert sent["item_type"] == 2


def test_calculate_price_rejects_unknown_delivery_type():
    client = _api(FakePathao())

    response = client.post(
        "/api/pathao/calculate-price",
        json={"storeId": 7, "recipientCity": 1, "recipientZone": 10, "deliveryType": "teleport"},
    )

    assert response.status_code == 422


def test_create_order_without_store_is_bad_request():
    fake = FakePathao()
    client = _api(fake)

    response = client.post(
        "/api/pathao/create-order",
        json={
            "merchantOrderId": "M1",
            "recipientName": "Rahim",
            "recipientPhone": "01700000000",
            "recipientAddress": "House 1, Road 2, Dhaka",
            "recipientCity": 1,
            "recipientZone": 10,
            "recipientArea": 100,
            "itemDescription": "Cake",
            "amountToCollect": 800,
        },
    )

    assert response.status_code == 400
    assert "store" in response.json()["detail"].lower()
    assert fake.calls == []


def test_create_order_returns_consignment():
    body = {"code": 200, "data": {"consignment_id": "CS123", "merchant_order_id": "M1", "order_status": "Pending"}}
    client = _api(FakePathao(routes={("POST", "/aladdin/api/v1/orders"): (200, body)}), store_id=42)

    response = client.post(
        "/api/pathao/create-order",
        json={
            "merchantOrderId": "M1",
            "recipientName": "Rahim",
            "recipientPhone": "01700000000",
            "recipientAddress": "House 1, Road 2, Dhaka",
            "recipientCity": 1,
            "recipientZone": 10,
            "recipientArea": 100,
            "itemQuantity": 1,
            "itemWeight": 0.5,
            "itemDescription": "Cake",
            "amountToCollect": 800,
        },
    )

    assert response.status_code == 200
    assert response.json() == body


def test_track_endpoint_and_upstream_error():
    fake = FakePathao(
        routes={
            ("GET", "/aladdin/api/v1/orders/CS123"): (200, {"data": {"order_status": "Delivered"}}),
            ("GET", "/aladdin/api/v1/orders/NOPE"): (404, "Consignment not found"),
        }
    )
    client = _api(fake)

    assert client.get("/api/pathao/track/CS123").json() == {"order_status": "Delivered"}

    missing = client.get("/api/pathao/track/NOPE")
    assert missing.status_code == 500
    assert "404" in missing.json()["detail"]
    assert "Consignment not found" in missing.json()["detail"]


def test_pathao_health_reports_token_state():
    client = _api(FakePathao())

    cold = client.get("/api/health/pathao")
    assert cold.status_code == 200
    assert cold.json()["token"]["has_token"] is False
    assert "healthy" not in cold.json()

    probed = client.get("/api/health/pathao", params={"probe": True})
    payload = probed.json()
    assert payload["healthy"] is True
    assert payload["token"]["has_token"] is True
    assert payload["token"]["seconds_remaining"] > 3500


def test_pathao_health_probe_reports_failure():
    client = _api(FakePathao(token=(500, "down for maintenance")))

    payload = client.get("/api/health/pathao", params={"probe": True}).json()

    assert payload["healthy"] is False
    assert "down for maintenance" in payload["error"]


def test_track_endpoint_keeps_query_characters_inside_the_id():
    fake = FakePathao(routes={("GET", "/aladdin/api/v1/orders/CS1?x=1"): (200, {"data": {"order_status": "Pending"}})})
    client = _api(fake)

    response = client.get("/api/pathao/track/CS1%3Fx%3D1")

    assert response.status_code == 200
    assert response.json() == {"order_status": "Pending"}
    assert fake.calls[-1].url.query == b""
