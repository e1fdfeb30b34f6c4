# tests/test_api/test_orders.py - placing orders

from decimal import Decimal

from app.models.order import Order


def test_place_single_order(client, auth_headers, db):
    payload = {
        "items": [{"productId": "1", "img_url": "http://x/a.png", "quantity": 2, "price": 9.99}],
        "total": 19.98,
    }
    response = client.post("/orders", json=payload, headers=auth_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "✅ Order placed successfully"
    assert len(body["orders"]) == 1

    order = body["orders"][0]
    assert order["status"] == "pending"
    assert order["price"] == 9.99
    assert order["quantity"] == 2
    assert order["product_id"] == 1
    assert order["user_uid"] == "user-1"

    stored = db.query(Order).one()
    assert stored.price == Decimal("9.99")
    assert stored.ordered_at is not None


def test_place_multiple_orders(client, auth_headers, db):
    payload = {
        "items": [
            {"productId": 1, "img_url": "http://x/a.png", "quantity": 1, "price": 5},
            {"productId": 2, "img_url": "http://x/b.png", "quantity": 4, "price": 2.5},
        ],
        "total": 15,
    }
    response = client.post("/orders", json=payload, headers=auth_headers)

    assert response.status_code == 201
    assert [o["product_id"] for o in response.json()["orders"]] == [1, 2]
    assert db.query(Order).filter(Order.status == "pending").count() == 2


def test_empty_items_or_missing_total(client, auth_headers):
    assert client.post("/orders", json={"items": [], "total": 5}, headers=auth_headers).status_code == 400
    item = {"productId": 1, "img_url": "http://x/a.png", "quantity": 1, "price": 5}
    assert client.post("/orders", json={"items": [item]}, headers=auth_headers).status_code == 400
    assert client.post("/orders", json={"items": [item], "total": 0}, headers=auth_headers).status_code == 400


def test_invalid_item_data(client, auth_headers):
    bad_items = [
        {"productId": 1, "img_url": "", "quantity": 1, "price": 5},
        {"productId": 1, "img_url": "http://x/a.png", "quantity": 0, "price": 5},
        {"productId": 1, "img_url": "http://x/a.png", "quantity": 1, "price": 0},
        {"productId": "abc", "img_url": "http://x/a.png", "quantity": 1, "price": 5},
    ]
    for item in bad_items:
        response = client.post("/orders", json={"items": [item], "total": 5}, headers=auth_headers)
        assert response.status_code == 400, item


def test_orders_require_auth(client):
    item = {"productId": 1, "img_url": "http://x/a.png", "quantity": 1, "price": 5}
    response = client.post("/orders", json={"items": [item], "total": 5})
    assert response.status_code == 401
