"""
Checkout orchestration.

Flow (subscription):
1) Look up the widget being bought
2) Create the Stripe customer and subscribe it to the plan
3) Save customer -> transaction -> order
4) Ask the invoice microservice to send an invoice

Flow (one-off widget order): the browser has already confirmed the
PaymentIntent, so step 2 becomes "retrieve intent + payment method".

There is no rollback. If a step after the charge fails, the failure is
logged and the request fails. The charge stays in Stripe.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import HTTPException

from catalog import service as catalog_service
from core import cards, invoices

from . import repository, schemas

logger = logging.getLogger(__name__)

SUBSCRIPTION_CURRENCY = "usd"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


async def _save_order(
    *,
    widget_id: int,
    first_name: str,
    last_name: str,
    email: str,
    amount: int,
    quantity: int,
    transaction: dict,
) -> tuple[int, int]:
    """
    Persist customer, transaction and order. Returns (order_id, transaction_id).
    """
    try:
        customer_id = await repository.insert_customer(first_name=first_name, last_name=last_name, email=email)
        transaction_id = await repository.insert_transaction(**transaction)
        order_id = await repository.insert_order(
            widget_id=widget_id,
            transaction_id=transaction_id,
            customer_id=customer_id,
            status_id=repository.ORDER_STATUS_CLEARED,
            quantity=quantity,
            amount=amount,
        )
    except Exception as exc:
        logger.exception(
            "order_save_failed email=%s widget_id=%s payment_intent=%s",
            email,
            widget_id,
            transaction.get("payment_intent"),
        )
        raise HTTPException(status_code=400, detail="Payment was taken, but the order could not be saved.") from exc

    logger.info(
        "order_saved order_id=%s transaction_id=%s customer_id=%s widget_id=%s",
        order_id,
        transaction_id,
        customer_id,
        widget_id,
    )
    return order_id, transaction_id


async def _send_invoice(invoice: dict) -> None:
    # Invoice failures never fail the sale.
    try:
        await invoices.create_and_send_invoice(invoice)
    except invoices.InvoiceError:
        logger.exception("invoice_failed order_id=%s email=%s", invoice.get("id"), invoice.get("email"))
        return
    logger.info("invoice_requested order_id=%s", invoice.get("id"))


async def subscribe_to_plan(payload: schemas.SubscriptionRequest) -> schemas.CheckoutResponse:
    widget = await catalog_service.get_widget(payload.product_id)

    try:
        customer = await cards.create_customer(payload.payment_method, payload.email)
    except cards.CardError as exc:
        return schemas.CheckoutResponse(ok=False, message=exc.message)

    try:
        subscription = await cards.subscribe_to_plan(
            customer,
            payload.plan,
            payload.email,
            payload.last_four,
            payload.card_brand,
        )
    except cards.CardError:
        logger.exception("subscribe_failed email=%s plan=%s", payload.email, payload.plan)
        return schemas.CheckoutResponse(ok=False, message="Error subscribing customer")

    order_id, transaction_id = await _save_order(
        widget_id=widget.id,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        amount=payload.amount,
        quantity=1,
        transaction={
            "amount": payload.amount,
            "currency": SUBSCRIPTION_CURRENCY,
            "last_four": payload.last_four,
            "bank_return_code": "",
            "transaction_status_id": repository.TRANSACTION_STATUS_CLEARED,
            "expiry_month": payload.expiry_month,
            "expiry_year": payload.expiry_year,
            "payment_intent": subscription.id,
            "payment_method": payload.payment_method,
        },
    )

    await _send_invoice(
        invoices.build_invoice(
            order_id=order_id,
            widget_id=widget.id,
            amount=payload.amount,
            product=widget.name,
            quantity=1,
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            created_at=_utc_now(),
        )
    )

    return schemas.CheckoutResponse(
        ok=True,
        message="Transaction successful",
        order_id=order_id,
        transaction_id=transaction_id,
    )


async def _card_transaction(
    *,
    payment_intent_id: str,
    payment_method_id: str,
    amount: int,
    currency: str,
) -> dict:
    """
    Build a cleared transaction from what Stripe knows about the payment.
    """
    try:
        pi = await cards.retrieve_payment_intent(payment_intent_id)
        pm = await cards.get_payment_method(payment_method_id)
    except cards.CardError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc

    details = cards.card_details(pm)
    return {
        "amount": amount,
        "currency": currency,
        "last_four": details["last_four"],
        "bank_return_code": cards.latest_charge_id(pi),
        "transaction_status_id": repository.TRANSACTION_STATUS_CLEARED,
        "expiry_month": details["expiry_month"],
        "expiry_year": details["expiry_year"],
        "payment_intent": payment_intent_id,
        "payment_method": payment_method_id,
    }


async def payment_succeeded(payload: schemas.PaymentSucceededRequest) -> schemas.CheckoutResponse:
    widget = await catalog_service.get_widget(payload.product_id)

    transaction = await _card_transaction(
        payment_intent_id=payload.payment_intent,
        payment_method_id=payload.payment_method,
        amount=payload.amount,
        currency=payload.currency,
    )

    order_id, transaction_id = await _save_order(
        widget_id=widget.id,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        amount=payload.amount,
        quantity=payload.quantity,
        transaction=transaction,
    )

    await _send_invoice(
        invoices.build_invoice(
            order_id=order_id,
            widget_id=widget.id,
            amount=payload.amount,
            product=widget.name,
            quantity=payload.quantity,
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            created_at=_utc_now(),
        )
    )

    return schemas.CheckoutResponse(
        ok=True,
        message="Transaction successful",
        order_id=order_id,
        transaction_id=transaction_id,
    )


async def virtual_terminal_succeeded(payload: schemas.VirtualTerminalRequest) -> schemas.TransactionResponse:
    transaction = await _card_transaction(
        payment_intent_id=payload.payment_intent,
        payment_method_id=payload.payment_method,
        amount=payload.amount,
        currency=payload.currency,
    )

    try:
        transaction_id = await repository.insert_transaction(**transaction)
    except Exception as exc:
        logger.exception("terminal_transaction_save_failed payment_intent=%s", payload.payment_intent)
        raise HTTPException(status_code=400, detail="Payment was taken, but the transaction could not be saved.") from exc

    logger.info("terminal_transaction_saved transaction_id=%s amount=%s", transaction_id, payload.amount)
    return schemas.TransactionResponse(id=transaction_id, **transaction)
