"""
Admin sales endpoint tests.
"""

from datetime import datetime, timezone

import pytest

from checkout import repository as checkout_repository
from core import cards
from sales import repository


def _order_row(order_id):
    return {
        "id": order_id,
        "widget_id": 1,
        "transaction_id": 100 + order_id,
        "customer_id": 200 + order_id,
        "status_id": 1,
        "quantity": 1,
        "amount": 1000,
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "widget_name": "Triangular Widget",
        "transaction_amount": 1000,
        "currency": "usd",
        "last_four": "4242",
        "expiry_month": 12,
        "expiry_year": 2030,
        "payment_intent": f"pi_{order_id}",
        "bank_return_code": f"ch_{order_id}",
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@example.com",
    }


@pytest.fixture
def order_store(monkeypatch):
    queries = []

    async def fake_count_orders(*, recurring):
        queries.append(("count", recurring))
        return 25

    async def fake_list_orders(*, recurring, limit, offset):
        queries.append(("list", recurring, limit, offset))
        return [_order_row(i) for i in range(offset + 1, min(offset + limit, 25) + 1)]

    monkeypatch.setattr(repository, "count_orders", fake_count_orders)
    monkeypatch.setattr(repository, "list_orders", fake_list_orders)
    return queries


def test_all_sales_paginates(admin_client, order_store):
    resp = admin_client.post("/api/admin/all-sales", json={"page_size": 10, "page": 3})

    assert resp.status_code == 200
    body = resp.json()
    assert body["current_page"] == 3
    assert body["page_size"] == 10
    assert body["last_page"] == 3
    assert body["total_records"] == 25
    assert [o["id"] for o in body["orders"]] == [21, 22, 23, 24, 25]
    assert ("list", False, 10, 20) in order_store


def test_all_sales_embeds_related_rows(admin_client, order_store):
    body = admin_client.post("/api/admin/all-sales", json={"page_size": 1, "page": 1}).json()

    order = body["orders"][0]
    assert order["widget"] == {"id": 1, "name": "Triangular Widget"}
    assert order["customer"]["email"] == "jane@example.com"
    assert order["transaction"]["payment_intent"] == "pi_1"


def test_all_subscriptions_filters_recurring(admin_client, order_store):
    resp = admin_client.post("/api/admin/all-subscriptions", json={"page_size": 5, "page": 1})

    assert resp.status_code == 200
    assert ("count", True) in order_store
    assert ("list", True, 5, 0) in order_store


@pytest.mark.parametrize("payload", [{"page_size": 0, "page": 1}, {"page_size": 10, "page": 0}, {"page_size": 101, "page": 1}])
def test_pagination_bounds(admin_client, order_store, payload):
    assert admin_client.post("/api/admin/all-sales", json=payload).status_code == 422


def test_get_sale(admin_client, monkeypatch):
    async def fake_get_order_by_id(order_id):
        return _order_row(order_id)

    monkeypatch.setattr(repository, "get_order_by_id", fake_get_order_by_id)

    resp = admin_client.get("/api/admin/get-sale/7")

    assert resp.status_code == 200
    assert resp.json()["id"] == 7
    assert resp.json()["transaction"]["bank_return_code"] == "ch_7"


def test_get_missing_sale(admin_client, monkeypatch):
    async def fake_get_order_by_id(order_id):
        return None

    monkeypatch.setattr(repository, "get_order_by_id", fake_get_order_by_id)

    assert admin_client.get("/api/admin/get-sale/7").status_code == 400


def test_get_sale_when_database_is_down(lenient_admin_client, monkeypatch, db_down):
    monkeypatch.setattr(repository, "get_order_by_id", db_down)

    resp = lenient_admin_client.get("/api/admin/get-sale/7")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Could not load order 7."


def test_all_sales_when_database_is_down(lenient_admin_client, monkeypatch, db_down):
    monkeypatch.setattr(repository, "count_orders", db_down)

    assert lenient_admin_client.post("/api/admin/all-sales", json={"page_size": 10, "page": 1}).status_code == 400


@pytest.fixture
def status_updates(monkeypatch):
    updates = []

    async def fake_update_order_status(order_id, status_id):
        updates.append((order_id, status_id))
        return True

    monkeypatch.setattr(repository, "update_order_status", fake_update_order_status)
    return updates


def test_refund(admin_client, monkeypatch, status_updates):
    refunds = []

    async def fake_refund(payment_intent_id, amount):
        refunds.append((payment_intent_id, amount))

    monkeypatch.setattr(cards, "refund", fake_refund)

    resp = admin_client.post("/api/admin/refund", json={"id": 5, "pi": "pi_5", "amount": 1000, "currency": "usd"})

    assert resp.status_code == 200
    assert resp.json() == {"error": False, "message": "Charge Refunded"}
    assert refunds == [("pi_5", 1000)]
    assert status_updates == [(5, checkout_repository.ORDER_STATUS_REFUNDED)]


def test_refund_stripe_failure(admin_client, monkeypatch, status_updates):
    async def failing_refund(payment_intent_id, amount):
        raise cards.CardError("Your card was declined")

    monkeypatch.setattr(cards, "refund", failing_refund)

    resp = admin_client.post("/api/admin/refund", json={"id": 5, "pi": "pi_5", "amount": 1000, "currency": "usd"})

    assert resp.status_code == 400
    assert status_updates == []


def test_refund_db_failure_after_refund(admin_client, monkeypatch):
    async def fake_refund(payment_intent_id, amount):
        return None

    async def failing_update(order_id, status_id):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(cards, "refund", fake_refund)
    monkeypatch.setattr(repository, "update_order_status", failing_update)

    resp = admin_client.post("/api/admin/refund", json={"id": 5, "pi": "pi_5", "amount": 1000, "currency": "usd"})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "the charge was refunded, but the database could not be updated"


def test_cancel_subscription(admin_client, monkeypatch, status_updates):
    cancelled = []

    async def fake_cancel(subscription_id):
        cancelled.append(subscription_id)

    monkeypatch.setattr(cards, "cancel_subscription", fake_cancel)

    resp = admin_client.post("/api/admin/cancel-subscription", json={"id": 6, "pi": "sub_6", "currency": "usd"})

    assert resp.status_code == 200
    assert resp.json() == {"error": False, "message": "Subscription Cancelled"}
    assert cancelled == ["sub_6"]
    assert status_updates == [(6, checkout_repository.ORDER_STATUS_CANCELLED)]


def test_cancel_subscription_unknown_order(admin_client, monkeypatch):
    async def fake_cancel(subscription_id):
        return None

    async def missed_update(order_id, status_id):
        return False

    monkeypatch.setattr(cards, "cancel_subscription", fake_cancel)
    monkeypatch.setattr(repository, "update_order_status", missed_update)

    resp = admin_client.post("/api/admin/cancel-subscription", json={"id": 6, "pi": "sub_6", "currency": "usd"})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "the subscription was cancelled, but the database could not be updated"
