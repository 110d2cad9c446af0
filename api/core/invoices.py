"""
Invoice microservice HTTP client.

Used endpoint:
- POST /invoice/create-and-send  -> 201 {"error": false, "message": "..."}
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import Any

import httpx


# Invoice failures are explicit so callers can log them without failing a sale.
class InvoiceError(RuntimeError):
    pass


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def invoice_service_url() -> str:
    return os.environ.get("INVOICE_SERVICE_URL", "http://localhost:5000").strip() or "http://localhost:5000"


def invoice_timeout_s() -> float:
    return _env_float("INVOICE_TIMEOUT_S", 10.0)


def build_invoice(
    *,
    order_id: int,
    widget_id: int,
    amount: int,
    product: str,
    quantity: int,
    first_name: str,
    last_name: str,
    email: str,
    created_at: datetime,
) -> dict[str, Any]:
    return {
        "id": int(order_id),
        "widget_id": int(widget_id),
        "amount": int(amount),
        "product": product,
        "quantity": int(quantity),
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "created_at": created_at.isoformat(),
    }


async def create_and_send_invoice(invoice: dict[str, Any], *, base_url: str | None = None) -> dict[str, Any]:
    """
    Ask the invoice service to render and mail an invoice for one order.
    """
    base_url = (base_url or invoice_service_url()).rstrip("/")
    try:
        async with httpx.AsyncClient(base_url=base_url, timeout=invoice_timeout_s()) as client:
            resp = await client.post("/invoice/create-and-send", json=invoice)
    except httpx.HTTPError as exc:
        raise InvoiceError(f"Invoice service request failed: {exc}") from exc

    if resp.status_code >= 300:
        body = resp.text[:500]
        raise InvoiceError(f"Invoice service returned {resp.status_code}: {body}")

    try:
        return resp.json()
    except ValueError:
        return {}
