"""
Card payments through Stripe.

All calls use the secret key from `STRIPE_SECRET`. The Stripe SDK is
blocking, so every call is pushed to the threadpool to keep the event loop
free.

Used objects:
- PaymentIntent  (create / retrieve)
- PaymentMethod  (retrieve, for last four + expiry)
- Customer       (create, with default payment method)
- Subscription   (create / cancel at period end)
- Refund         (create against a payment intent)
"""

from __future__ import annotations

import logging
import os
from typing import Any

import stripe
from fastapi.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

DEFAULT_DECLINE_MESSAGE = "Your card was declined"

_CARD_ERROR_MESSAGES = {
    "card_declined": DEFAULT_DECLINE_MESSAGE,
    "expired_card": "Your card is expired",
}


# Card failures carry a message that is safe to show to the customer.
class CardError(RuntimeError):
    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


def stripe_secret() -> str:
    return os.environ.get("STRIPE_SECRET", "").strip()


def stripe_key() -> str:
    return os.environ.get("STRIPE_KEY", "").strip()


def card_error_message(code: str | None) -> str:
    """
    Human readable version of a Stripe error code.
    """
    return _CARD_ERROR_MESSAGES.get((code or "").strip(), DEFAULT_DECLINE_MESSAGE)


def _to_card_error(exc: stripe.StripeError) -> CardError:
    code = getattr(exc, "code", None)
    return CardError(card_error_message(code), code=code)


async def _call(operation: str, func: Any, *args: Any, **kwargs: Any) -> Any:
    kwargs.setdefault("api_key", stripe_secret())
    try:
        return await run_in_threadpool(func, *args, **kwargs)
    except stripe.StripeError as exc:
        logger.warning("stripe_call_failed operation=%s code=%s error=%s", operation, getattr(exc, "code", None), exc)
        raise _to_card_error(exc) from exc


async def create_payment_intent(currency: str, amount: int) -> Any:
    """
    Create a PaymentIntent for `amount` (smallest currency unit).
    """
    return await _call(
        "payment_intent.create",
        stripe.PaymentIntent.create,
        amount=int(amount),
        currency=(currency or "usd").strip().lower(),
    )


async def charge(currency: str, amount: int) -> Any:
    return await create_payment_intent(currency, amount)


async def retrieve_payment_intent(payment_intent_id: str) -> Any:
    return await _call("payment_intent.retrieve", stripe.PaymentIntent.retrieve, payment_intent_id)


async def get_payment_method(payment_method_id: str) -> Any:
    return await _call("payment_method.retrieve", stripe.PaymentMethod.retrieve, payment_method_id)


async def create_customer(payment_method: str, email: str) -> Any:
    """
    Create a customer with `payment_method` attached and used for invoices.
    """
    return await _call(
        "customer.create",
        stripe.Customer.create,
        payment_method=payment_method,
        email=email,
        invoice_settings={"default_payment_method": payment_method},
    )


async def subscribe_to_plan(
    customer: Any,
    plan: str,
    email: str,
    last_four: str,
    card_type: str,
) -> Any:
    subscription = await _call(
        "subscription.create",
        stripe.Subscription.create,
        customer=customer.id,
        items=[{"plan": plan}],
        metadata={"last_four": last_four, "card_type": card_type},
        expand=["latest_invoice.payment_intent"],
    )
    logger.info("subscription_created subscription_id=%s email=%s plan=%s", subscription.id, email, plan)
    return subscription


async def refund(payment_intent_id: str, amount: int) -> Any:
    return await _call(
        "refund.create",
        stripe.Refund.create,
        payment_intent=payment_intent_id,
        amount=int(amount),
    )


async def cancel_subscription(subscription_id: str) -> Any:
    """
    Stop renewal. The customer keeps access until the period ends.
    """
    return await _call(
        "subscription.modify",
        stripe.Subscription.modify,
        subscription_id,
        cancel_at_period_end=True,
    )


def card_details(payment_method: Any) -> dict[str, Any]:
    """
    Pull last four + expiry out of a PaymentMethod object.
    """
    card = getattr(payment_method, "card", None)
    return {
        "last_four": str(getattr(card, "last4", "") or ""),
        "expiry_month": int(getattr(card, "exp_month", 0) or 0),
        "expiry_year": int(getattr(card, "exp_year", 0) or 0),
        "brand": str(getattr(card, "brand", "") or ""),
    }


def latest_charge_id(payment_intent: Any) -> str:
    """
    `latest_charge` is an id unless it was expanded into a Charge object.
    """
    charge_ref = getattr(payment_intent, "latest_charge", None)
    if charge_ref is None:
        return ""
    if isinstance(charge_ref, str):
        return charge_ref
    return str(getattr(charge_ref, "id", "") or "")
