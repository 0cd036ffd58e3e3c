from fastapi import FastAPI
from fastapi.testclient import TestClient

from table_order.core.metrics import InMemoryCommandMetrics
from table_order.data.menu import default_categories, default_menu
from table_order.deps import get_store
from table_order.routers.analytics import router as analytics_router
from table_order.routers.cart import router as cart_router
from table_order.routers.menu import router as menu_router
from table_order.routers.notifications import router as notifications_router
from table_order.routers.orders import router as orders_router
from table_order.routers.session import router as session_router
from table_order.services.store import OrderStore
from tests.fixtures_data import LIFECYCLE, NEW_MENU_ITEM, VALID_DRAFT, FakeClock


def _build_client():
    store = OrderStore(default_menu(), default_categories(), clock=FakeClock(), metrics=InMemoryCommandMetrics())
    app = FastAPI()
    for router in (menu_router, cart_router, orders_router, notifications_router, analytics_router, session_router):
        app.include_router(router)
    app.dependency_overrides[get_store] = lambda: store
    return TestClient(app), store


def _place_order(client):
    client.put("/api/session/table", json={"table_number": 5})
    client.post("/api/cart/items", json={"item_id": "nshima"})
    client.post("/api/cart/items", json={"item_id": "nshima"})
    client.post("/api/cart/items", json={"item_id": "grilled-chicken"})
    return client.post("/api/orders", json=VALID_DRAFT)


def test_cart_flow():
    client, _store = _build_client()

    client.post("/api/cart/items", json={"item_id": "nshima"})
    client.post("/api/cart/items", json={"item_id": "grilled-chicken"})
    client.patch("/api/cart/items/nshima", json={"quantity": 2})
    response = client.put("/api/cart/items/grilled-chicken/instructions", json={"instructions": "no chilli"})

    body = response.json()
    assert response.status_code == 200
    assert body["total"] == "175.00"
    assert body["count"] == 3
    assert body["estimated_time"] == 25
    assert body["items"][1]["special_instructions"] == "no chilli"

    removed = client.delete("/api/cart/items/grilled-chicken").json()
    assert [line["id"] for line in removed["items"]] == ["nshima"]
    assert client.delete("/api/cart").json()["items"] == []


def test_cart_rejects_unknown_unavailable_and_negative():
    client, _store = _build_client()

    assert client.post("/api/cart/items", json={"item_id": "missing"}).status_code == 404
    assert client.post("/api/cart/items", json={"item_id": "pumpkin-pudding"}).status_code == 409

    client.post("/api/cart/items", json={"item_id": "maheu"})
    response = client.patch("/api/cart/items/maheu", json={"quantity": -2})
    assert response.status_code == 422
    assert client.get("/api/cart").json()["count"] == 1


def test_place_order_and_lifecycle():
    client, _store = _build_client()

    created = _place_order(client)

    assert created.status_code == 201
    order = created.json()
    assert order["total"] == "175.00"
    assert order["estimated_time"] == 25
    assert order["table_number"] == 5
    assert client.get("/api/cart").json()["items"] == []

    for status in LIFECYCLE:
        response = client.patch(f"/api/orders/{order['id']}/status", json={"status": status})
        assert response.status_code == 200

    analytics = client.get("/api/analytics").json()
    assert analytics["total_orders"] == 1
    assert analytics["total_revenue"] == "175.00"


def test_order_errors_map_to_http_statuses():
    client, _store = _build_client()

    empty = client.post("/api/orders", json=VALID_DRAFT)
    assert empty.status_code == 422

    order = _place_order(client).json()
    illegal = client.patch(f"/api/orders/{order['id']}/status", json={"status": "completed"})
    assert illegal.status_code == 409

    assert client.get("/api/orders/missing").status_code == 404
    assert client.patch("/api/orders/missing/status", json={"status": "confirmed"}).status_code == 404
    assert client.get("/api/orders", params={"date": "decade"}).status_code == 422


def test_order_listing_filters_and_stats():
    client, _store = _build_client()
    order = _place_order(client).json()
    client.post("/api/cart/items", json={"item_id": "maheu"})
    second = client.post("/api/orders", json={**VALID_DRAFT, "customer_name": "Chanda"}).json()
    client.post(f"/api/orders/{order['id']}/cancel")

    listed = client.get("/api/orders", params={"sort_by": "total", "sort_order": "asc"}).json()
    assert [entry["id"] for entry in listed] == [second["id"], order["id"]]

    searched = client.get("/api/orders", params={"search": "chanda"}).json()
    assert [entry["id"] for entry in searched] == [second["id"]]

    cancelled = client.get("/api/orders", params={"status": "cancelled", "date": "today"}).json()
    assert [entry["id"] for entry in cancelled] == [order["id"]]

    stats = client.get("/api/orders/stats").json()
    assert stats["today_orders"] == 2
    assert stats["pending_orders"] == 1


def test_edit_payment_review_and_bulk():
    client, _store = _build_client()
    order = _place_order(client).json()

    edited = client.patch(f"/api/orders/{order['id']}", json={"items": [{"item_id": "nshima", "quantity": 1}]})
    assert edited.json()["total"] == "130.00"

    paid = client.patch(f"/api/orders/{order['id']}/payment", json={"payment_status": "paid"})
    assert paid.json()["payment_status"] == "paid"

    bulk = client.post("/api/orders/bulk-status", json={"order_ids": [order["id"]], "status": "confirmed"})
    assert [entry["status"] for entry in bulk.json()] == ["confirmed"]

    review = client.post(f"/api/orders/{order['id']}/review", json={"rating": 4, "comment": "Great"})
    assert review.status_code == 201
    assert client.get(f"/api/orders/{order['id']}").json()["rating"] == 4


def test_menu_routes():
    client, _store = _build_client()

    client.put("/api/session/search", json={"query": "groundnut"})
    menu = client.get("/api/menu").json()
    assert {item["id"] for item in menu["items"]} == {"chikanda", "ifisashi"}
    assert menu["has_active_filters"] is True

    client.put("/api/session/filters", json={"spicy_level": ["hot"]})
    assert client.get("/api/menu").json()["is_empty"] is True
    cleared = client.delete("/api/session/filters").json()
    assert cleared["search_query"] == ""

    created = client.post("/api/admin/menu", json=NEW_MENU_ITEM)
    assert created.status_code == 201
    item_id = created.json()["id"]

    toggled = client.post(f"/api/admin/menu/{item_id}/toggle").json()
    assert toggled["available"] is False
    duplicate = client.post(f"/api/admin/menu/{item_id}/duplicate").json()
    assert duplicate["name"] == "Roasted Groundnuts (Copy)"

    updated = client.put(f"/api/admin/menu/{item_id}", json={**NEW_MENU_ITEM, "price": "12.50"})
    assert updated.json()["price"] == "12.50"
    assert client.put("/api/admin/menu/missing", json=NEW_MENU_ITEM).status_code == 404

    admin_ids = {item["id"] for item in client.get("/api/admin/menu", params={"category": "appetizers"}).json()}
    assert item_id in admin_ids
    assert client.get("/api/admin/menu/stats").json()["appetizers"]["total"] == 5
    assert len(client.get("/api/menu/categories").json()) == 5


def test_notification_routes():
    client, _store = _build_client()
    _place_order(client)

    listing = client.get("/api/notifications").json()
    assert listing["unread_count"] == 1
    notification_id = listing["items"][0]["id"]

    created = client.post("/api/notifications", json={"title": "Promo", "message": "Free maheu", "type": "promotion"})
    assert created.status_code == 201

    read = client.post(f"/api/notifications/{notification_id}/read").json()
    assert read["unread_count"] == 1
    assert client.post("/api/notifications/missing/read").status_code == 404
    assert client.post("/api/notifications/read-all").json()["unread_count"] == 0
    assert client.delete("/api/notifications").status_code == 204
    assert client.get("/api/notifications").json()["items"] == []


def test_session_routes():
    client, _store = _build_client()

    assert client.put("/api/session/table", json={"table_number": 0}).status_code == 422
    client.put("/api/session/currency", json={"value": "usd"})
    client.put("/api/session/language", json={"value": "ny"})
    client.put("/api/session/restaurant", json={"value": "lusaka-central"})
    client.put("/api/session/zone", json={"value": "zone-b"})
    session = client.post("/api/session/theme").json()

    assert session["currency"] == "USD"
    assert session["language"] == "ny"
    assert session["restaurant_id"] == "lusaka-central"
    assert session["zone_id"] == "zone-b"
    assert session["dark_mode"] is True
    assert client.put("/api/session/filters", json={"price_range": ["50", "10"]}).status_code == 422


def test_summary_analytics_view():
    client, _store = _build_client()

    assert client.get("/api/analytics", params={"view": "summary"}).status_code == 200
    assert client.get("/api/analytics", params={"view": "weekly"}).status_code == 422
