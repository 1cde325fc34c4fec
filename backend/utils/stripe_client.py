# backend/utils/stripe_client.py
import json
import logging
from urllib.parse import urljoin

import stripe

from config import settings

logger = logging.getLogger(__name__)


class WebhookSignatureError(Exception):
    """Raised when a webhook payload cannot be authenticated or parsed."""


class StripeClient:
    def __init__(self):
        self.api_key = settings.STRIPE_SECRET_KEY
        self.webhook_secret = settings.STRIPE_WEBHOOK_SECRET
        self.tolerance = settings.STRIPE_WEBHOOK_TOLERANCE
        self.currency = settings.STRIPE_CURRENCY
        self.success_url = urljoin(settings.FRONTEND_URL, "/payment/success") + "?session_id={CHECKOUT_SESSION_ID}"
        self.cancel_url = urljoin(settings.FRONTEND_URL, "/payment/paygo")

    def create_checkout_session(self, *, line_items: list, customer_email: str = None, metadata: dict = None):
        """Create a hosted checkout page and return the Stripe session object."""
        try:
            return stripe.checkout.Session.create(
                api_key=self.api_key,
                payment_method_types=["card"],
                mode="payment",
                line_items=line_items,
                success_url=self.success_url,
                cancel_url=self.cancel_url,
                customer_email=customer_email or None,
                metadata=metadata or {},
            )
        except stripe.StripeError as e:
            logger.error("Stripe checkout session error: %s", getattr(e, "user_message", None) or e)
            raise

    def construct_event(self, payload: bytes, signature: str) -> dict:
        """Verify the Stripe-Signature header and return the decoded event."""
        try:
            body = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(body, signature, self.webhook_secret, self.tolerance)
            event = json.loads(body)
        except (stripe.SignatureVerificationError, UnicodeDecodeError, ValueError) as e:
            raise WebhookSignatureError(str(e)) from e
        if not isinstance(event, dict):
            raise WebhookSignatureError("Event payload is not a JSON object")
        return event


stripe_client = StripeClient()
