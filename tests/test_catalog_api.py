from types import SimpleNamespace

from catalog import repository
from core import cards


def test_get_widget(client, monkeypatch, widget_row):
    async def fake_get_widget(widget_id):
        return dict(widget_row, id=widget_id, is_recurring=False, plan_id="")

    monkeypatch.setattr(repository, "get_widget", fake_get_widget)

    resp = client.get("/api/widget/1")

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == 1
    assert body["price"] == 2000
    assert body["is_recurring"] is False


def test_get_missing_widget(client, monkeypatch):
    async def fake_get_widget(widget_id):
        return None

    monkeypatch.setattr(repository, "get_widget", fake_get_widget)

    assert client.get("/api/widget/99").status_code == 400


def test_get_widget_when_database_is_down(lenient_client, monkeypatch, db_down):
    monkeypatch.setattr(repository, "get_widget", db_down)

    resp = lenient_client.get("/api/widget/1")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Could not load widget 1."


def test_payment_intent(client, monkeypatch):
    async def fake_charge(currency, amount):
        return SimpleNamespace(id="pi_1", client_secret="pi_1_secret", amount=amount, currency=currency, status="requires_payment_method")

    monkeypatch.setattr(cards, "charge", fake_charge)

    resp = client.post("/api/payment-intent", json={"amount": "1000", "currency": "usd"})

    assert resp.status_code == 200
    assert resp.json() == {
        "id": "pi_1",
        "client_secret": "pi_1_secret",
        "amount": 1000,
        "currency": "usd",
        "status": "requires_payment_method",
    }


def test_payment_intent_card_error(client, monkeypatch):
    async def fake_charge(currency, amount):
        raise cards.CardError("Your card is expired", code="expired_card")

    monkeypatch.setattr(cards, "charge", fake_charge)

    resp = client.post("/api/payment-intent", json={"amount": "1000", "currency": "usd"})

    assert resp.status_code == 200
    assert resp.json() == {"ok": False, "message": "Your card is expired", "content": ""}


def test_payment_intent_rejects_bad_amount(client):
    assert client.post("/api/payment-intent", json={"amount": "ten", "currency": "usd"}).status_code == 400
    assert client.post("/api/payment-intent", json={"amount": "0", "currency": "usd"}).status_code == 400
