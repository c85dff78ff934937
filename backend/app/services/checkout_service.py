"""
Checkout Service
Turns a product selection plus shipping and payment input into a persisted
order and a receipt.

Flow:
- select: product + quantity (clamped to >= 1, no stock check) -> total
- prefill_shipping: purchaser profile pre-fills the shipping form
- validate: shipping fields present, card fields present for card methods
- submit: ONE insert into orders, then a receipt

Validation happens before any backend call. A backend failure aborts the
attempt with the backend message; nothing is retried and nothing partial is
left behind. Repeating an Idempotency-Key inside its TTL returns the first
receipt instead of inserting a duplicate order.
"""
import logging
from typing import Optional

from app.core.config import settings
from app.core.database import DataBackend
from app.core.exceptions import NotFoundError, ValidationError
from app.core.idempotency import IdempotencyCache
from app.domain.order import (
    CheckoutRequest,
    OrderCreate,
    OrderReceipt,
    OrderSelection,
    PaymentDetails,
    ShippingInfo,
)
from app.domain.product import RecordId
from app.repositories.order_repository import OrderRepository
from app.repositories.product_repository import ProductRepository
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


# Shared by every request served by this process
checkout_idempotency_cache = IdempotencyCache(ttl_seconds=settings.IDEMPOTENCY_TTL_SECONDS)


class CheckoutService:
    """Service for placing single-product orders"""

    def __init__(self, backend: DataBackend, idempotency_cache: Optional[IdempotencyCache] = None):
        self.products = ProductRepository(backend)
        self.orders = OrderRepository(backend)
        self.users = UserRepository(backend)
        self.idempotency_cache = idempotency_cache if idempotency_cache is not None else checkout_idempotency_cache

    def select(self, product_id: RecordId, quantity: int) -> OrderSelection:
        """
        Pick a product and quantity

        Args:
            product_id: Product to buy
            quantity: Requested units, clamped to a minimum of 1

        Raises:
            NotFoundError: product does not exist
        """
        product = self.products.find_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")
        return OrderSelection(product=product, quantity=max(1, int(quantity)))

    def prefill_shipping(self, email: str) -> ShippingInfo:
        """Shipping form pre-filled from the purchaser profile, empty if there is none"""
        profile = self.users.find_by_email(email)
        if profile is None:
            return ShippingInfo()
        return ShippingInfo(
            full_name=profile.full_name or "",
            address=profile.address or "",
            mobile=profile.mobile or "",
        )

    @staticmethod
    def validate(shipping: ShippingInfo, payment: PaymentDetails):
        """
        Form checks run before any network call

        Raises:
            ValidationError: a shipping field is empty, or a card field is empty for a card method
        """
        missing_shipping = shipping.missing_fields()
        if missing_shipping:
            raise ValidationError(f"Please fill in shipping details: {', '.join(missing_shipping)}")

        missing_card = payment.missing_card_fields()
        if missing_card:
            raise ValidationError(f"Please fill in card details: {', '.join(missing_card)}")

    def _cache_key(self, purchaser_email: str, idempotency_key: Optional[str]) -> Optional[str]:
        if not idempotency_key:
            return None
        return f"{purchaser_email}:{idempotency_key}"

    def submit(
        self,
        purchaser_email: str,
        selection: OrderSelection,
        shipping: ShippingInfo,
        payment: PaymentDetails,
        idempotency_key: Optional[str] = None
    ) -> OrderReceipt:
        """
        Persist the order with a single insert and return the receipt

        Raises:
            ValidationError: form incomplete (nothing sent to the backend)
            BackendError: insert failed (message verbatim)
        """
        cache_key = self._cache_key(purchaser_email, idempotency_key)
        if cache_key:
            cached = self.idempotency_cache.get(cache_key)
            if cached is not None:
                logger.info(f"Replaying order {cached.order_id} for idempotency key {idempotency_key}")
                return cached

        self.validate(shipping, payment)

        product = selection.product
        order = self.orders.create(OrderCreate(
            user_email=purchaser_email,
            product_id=product.id,
            vendor_id=product.vendor_id,
            quantity=selection.quantity,
            total=selection.total,
            full_name=shipping.full_name,
            address=shipping.address,
            pin_code=shipping.pin_code,
            mobile=shipping.mobile,
            payment_method=payment.method,
        ))

        receipt = OrderReceipt(
            order_id=order.id,
            product_id=product.id,
            product_name=product.name,
            quantity=selection.quantity,
            total=selection.total,
            payment_method=payment.method,
            status=order.display_status,
        )

        if cache_key:
            self.idempotency_cache.put(cache_key, receipt)

        logger.info(
            f"Order {order.id} placed by {purchaser_email}: product {product.id} "
            f"x{selection.quantity} = {receipt.display_total} ({payment.method.value})"
        )
        return receipt

    def place_order(
        self,
        purchaser_email: str,
        request: CheckoutRequest,
        idempotency_key: Optional[str] = None
    ) -> OrderReceipt:
        """
        Validate, select and submit in one call

        Form checks run before the product lookup; replay of an
        Idempotency-Key is handled by submit().
        """
        self.validate(request.shipping, request.payment)
        selection = self.select(request.product_id, request.quantity)
        return self.submit(
            purchaser_email,
            selection,
            request.shipping,
            request.payment,
            idempotency_key=idempotency_key
        )
