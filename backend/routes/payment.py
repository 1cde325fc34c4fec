# backend/routes/payment.py
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session, selectinload

from config import settings
from database import get_db
from models.cart import CartSession, CartItem, CartTransaction
from models.product import Product
from models.users import User, UserSubscription
from schemas.cart import CheckoutRequest, CheckoutResponse, CartSessionOut
from utils.audit import write_log, client_ip
from utils.stripe_client import stripe_client, WebhookSignatureError
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/payment", tags=["Payment"])
logger = logging.getLogger(__name__)

# Product type -> UserSubscription counter credited on purchase
CREDIT_COUNTERS = {
    "pr": "remaining_pr",
    "credits": "remaining_pr",
    "enhanced": "remaining_pluspr",
    "newsdb": "newsdb_credits",
}


def _now():
    return datetime.now(timezone.utc)

def _to_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None

def _stripe_id(value) -> Optional[str]:
    # Expandable Stripe fields arrive either as an id string or as an object
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, dict):
        return value.get("id")
    return getattr(value, "id", None)

def _line_items(cart_session: CartSession) -> List[dict]:
    line_items = []
    for item in cart_session.items:
        product_data = {"name": item.product_name}
        if item.product is not None and item.product.description:
            product_data["description"] = item.product.description
        line_items.append({
            "price_data": {
                "currency": settings.STRIPE_CURRENCY,
                "product_data": product_data,
                "unit_amount": item.unit_price,
            },
            "quantity": item.quantity,
        })
    return line_items


# ==========================================
#  CHECKOUT
# ==========================================
@router.post("/checkout", response_model=CheckoutResponse)
def create_checkout(
    payload: CheckoutRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    product = db.query(Product).filter(Product.id == payload.product_id, Product.is_deleted == False).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    price = product.price or 0
    try:
        cart_session = CartSession(
            session_uuid=str(uuid.uuid4()),
            user_id=current_user.id,
            partner_id=current_user.partner_id or settings.DEFAULT_PARTNER_ID,
            status="draft",
            subtotal=price,
            tax_amount=0,
            total_amount=price,
        )
        db.add(cart_session)
        db.flush()

        # Snapshot of the product as sold
        db.add(CartItem(
            session_id=cart_session.id,
            product_id=product.id,
            product_name=product.display_name or product.short_name or "Product",
            product_type=product.product_type or "credits",
            product_credits=product.product_credits,
            unit_price=price,
            quantity=1,
            total_price=price,
            stripe_price_id=product.stripe_live or product.stripe_test,
        ))
        db.flush()
        db.refresh(cart_session)

        checkout = stripe_client.create_checkout_session(
            line_items=_line_items(cart_session),
            customer_email=current_user.email,
            metadata={
                "userId": str(current_user.id),
                "cartSessionId": str(cart_session.id),
                "productId": str(product.id),
            },
        )

        cart_session.stripe_checkout_session_id = _stripe_id(checkout)
        cart_session.stripe_payment_intent_id = _stripe_id(getattr(checkout, "payment_intent", None))
        cart_session.payment_attempted_at = _now()
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Error creating checkout session for user %s, product %s", current_user.id, product.id)
        raise HTTPException(status_code=500, detail="Failed to create checkout session")

    write_log(
        db, user_id=current_user.id, action="CHECKOUT_START", resource="payment",
        ip=client_ip(request),
        meta={"cart_session_id": cart_session.id, "product_id": product.id, "total": cart_session.total_amount},
    )
    return CheckoutResponse(url=getattr(checkout, "url", None))


@router.get("/sessions", response_model=List[CartSessionOut])
def list_my_sessions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(CartSession).options(
        selectinload(CartSession.items), selectinload(CartSession.transactions)
    ).filter(CartSession.user_id == current_user.id).order_by(CartSession.id.desc()).all()


# ==========================================
#  WEBHOOK
# ==========================================
def _apply_credits(db: Session, user_id: int, items: List[CartItem]) -> dict:
    """Increment subscription counters for every credit-bearing item."""
    granted = {}
    for item in items:
        counter = CREDIT_COUNTERS.get(item.product_type)
        if not counter or not item.product_credits:
            continue
        amount = item.product_credits * (item.quantity or 1)

        sub = db.query(UserSubscription).filter(UserSubscription.user_id == user_id).first()
        if not sub:
            sub = UserSubscription(user_id=user_id, remaining_pr=0, remaining_pluspr=0, newsdb_credits=0)
            db.add(sub)
        setattr(sub, counter, (getattr(sub, counter) or 0) + amount)
        db.flush()
        granted[counter] = granted.get(counter, 0) + amount
    return granted


def _reconcile_checkout_completed(db: Session, event: dict, checkout: dict) -> Optional[dict]:
    metadata = checkout.get("metadata") or {}
    cart_session_id = _to_int(metadata.get("cartSessionId"))
    if not cart_session_id:
        logger.warning("checkout.session.completed %s without cartSessionId", event.get("id"))
        return None

    cart_session = db.query(CartSession).filter(CartSession.id == cart_session_id).with_for_update().first()
    if not cart_session:
        logger.warning("checkout.session.completed for unknown cart session %s", cart_session_id)
        return None

    # One successful payment per cart session; redeliveries change nothing
    already_paid = db.query(CartTransaction).filter(
        CartTransaction.session_id == cart_session.id,
        CartTransaction.status == "succeeded",
    ).first()
    if already_paid:
        logger.info("Cart session %s already reconciled, ignoring event %s", cart_session.id, event.get("id"))
        return None

    metadata_user = _to_int(metadata.get("userId"))
    if metadata_user and metadata_user != cart_session.user_id:
        logger.warning("Cart session %s metadata user %s differs from owner %s",
                       cart_session.id, metadata_user, cart_session.user_id)

    now = _now()
    payment_intent = _stripe_id(checkout.get("payment_intent"))
    cart_session.status = "completed"
    cart_session.completed_at = now
    if payment_intent:
        cart_session.stripe_payment_intent_id = payment_intent

    customer_email = checkout.get("customer_email") or (checkout.get("customer_details") or {}).get("email")
    db.add(CartTransaction(
        session_id=cart_session.id,
        transaction_type="payment",
        status="succeeded",
        amount=checkout.get("amount_total") or 0,
        currency=checkout.get("currency") or settings.STRIPE_CURRENCY,
        stripe_event_id=event.get("id"),
        stripe_payment_intent_id=payment_intent,
        customer_email=customer_email,
        processed_at=now,
    ))
    db.flush()

    granted = _apply_credits(db, cart_session.user_id, cart_session.items)
    return {
        "user_id": cart_session.user_id,
        "action": "PAYMENT_SUCCEEDED",
        "meta": {"cart_session_id": cart_session.id, "amount": checkout.get("amount_total") or 0, "granted": granted},
    }


def _record_payment_failure(db: Session, event: dict, intent: dict) -> Optional[dict]:
    intent_id = intent.get("id")
    cart_session = db.query(CartSession).filter(CartSession.stripe_payment_intent_id == intent_id).first() if intent_id else None
    if not cart_session:
        # Nothing to attach it to; acknowledging stops Stripe redelivering it
        logger.info("payment_intent.payment_failed for unknown intent %s dropped", intent_id)
        return None

    error = intent.get("last_payment_error") or {}
    db.add(CartTransaction(
        session_id=cart_session.id,
        transaction_type="payment",
        status="failed",
        amount=intent.get("amount") or 0,
        currency=intent.get("currency") or settings.STRIPE_CURRENCY,
        stripe_event_id=event.get("id"),
        stripe_payment_intent_id=intent_id,
        error_code=error.get("code"),
        error_message=error.get("message"),
        processed_at=_now(),
    ))
    db.flush()
    return {
        "user_id": cart_session.user_id,
        "action": "PAYMENT_FAILED",
        "meta": {"cart_session_id": cart_session.id, "error_code": error.get("code")},
    }


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    db: Session = Depends(get_db),
    stripe_signature: Optional[str] = Header(None, alias="Stripe-Signature"),
):
    if not stripe_signature:
        raise HTTPException(status_code=400, detail="No signature")

    body = await request.body()
    try:
        event = stripe_client.construct_event(body, stripe_signature)
    except WebhookSignatureError as e:
        logger.warning("Stripe webhook signature verification failed: %s", e)
        raise HTTPException(status_code=400, detail="Invalid signature")

    event_type = event.get("type")
    data = event.get("data")
    obj = data.get("object") if isinstance(data, dict) else None
    if not isinstance(obj, dict):
        obj = {}
    logger.info("Stripe webhook received: id=%s type=%s", event.get("id"), event_type)

    try:
        if event_type == "checkout.session.completed":
            outcome = _reconcile_checkout_completed(db, event, obj)
        elif event_type == "payment_intent.payment_failed":
            outcome = _record_payment_failure(db, event, obj)
        else:
            outcome = None
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Error processing Stripe webhook %s", event.get("id"))
        raise HTTPException(status_code=500, detail="Webhook handler failed")

    if outcome:
        try:
            write_log(
                db, user_id=outcome["user_id"], action=outcome["action"], resource="payment",
                ip=client_ip(request), meta={"event_id": event.get("id"), **outcome["meta"]},
            )
        except Exception:
            db.rollback()
            logger.exception("Failed to write audit log for Stripe event %s", event.get("id"))

    return {"received": True}
