"""
Order Domain Models

Represents checkout and fulfillment entities in the Kisan marketplace:
the order record, its shipping/payment snapshot, the checkout selection,
the receipt, and the fulfillment status state machine.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, FrozenSet, List, Optional
from datetime import datetime
from decimal import Decimal
from enum import Enum

from app.core.exceptions import InvalidTransitionError, ValidationError
from app.domain.product import Product, RecordId


# ================================================================================
# STATUS STATE MACHINE
# ================================================================================

class OrderStatus(str, Enum):
    """Fulfillment stage of an order"""
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class StatusPolicy(str, Enum):
    """How status changes are checked"""
    STRICT = "strict"          # transition table below
    PERMISSIVE = "permissive"  # any label may follow any other


ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PROCESSING: frozenset([OrderStatus.SHIPPED, OrderStatus.CANCELLED]),
    OrderStatus.SHIPPED: frozenset([OrderStatus.DELIVERED, OrderStatus.CANCELLED]),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES: FrozenSet[OrderStatus] = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)

DEFAULT_STATUS = OrderStatus.PROCESSING


def parse_status(value: Optional[str]) -> Optional[OrderStatus]:
    """
    Read a stored status label

    Unset labels count as processing. Unknown labels return None.
    """
    if value is None or not value.strip():
        return DEFAULT_STATUS
    try:
        return OrderStatus(value.strip().lower())
    except ValueError:
        return None


def validate_transition(
    current: Optional[str],
    target: str,
    policy: StatusPolicy = StatusPolicy.STRICT
) -> str:
    """
    Check a status change and return the label to store

    Args:
        current: Status currently stored on the order (may be unset)
        target: Requested status
        policy: STRICT follows ALLOWED_TRANSITIONS, PERMISSIVE accepts any non-empty label

    Raises:
        ValidationError: target is empty
        InvalidTransitionError: the policy refuses the change
    """
    if target is None or not target.strip():
        raise ValidationError("Status is required")

    if policy == StatusPolicy.PERMISSIVE:
        return target.strip()

    current_status = parse_status(current)
    target_status = parse_status(target)
    current_label = current or DEFAULT_STATUS.value

    if current_status is None or target_status is None:
        raise InvalidTransitionError(current_label, target)

    if target_status not in ALLOWED_TRANSITIONS[current_status]:
        raise InvalidTransitionError(current_label, target_status.value)

    return target_status.value


# ================================================================================
# CHECKOUT
# ================================================================================

class PaymentMethod(str, Enum):
    """Payment method tags accepted at checkout"""
    VISA = "visa"
    MASTERCARD = "mastercard"
    COD = "cod"

    @property
    def is_card(self) -> bool:
        return self != PaymentMethod.COD


class ShippingInfo(BaseModel):
    """
    Shipping snapshot copied onto every order

    All fields are free text; later profile edits never change past orders.
    """
    full_name: str = ""
    address: str = ""
    pin_code: str = ""
    mobile: str = ""

    def missing_fields(self) -> List[str]:
        return [name for name, value in self.model_dump().items() if not (value or "").strip()]


class PaymentDetails(BaseModel):
    """
    Payment form. Card fields are checked for presence only: nothing is
    charged and card data is never stored.
    """
    method: PaymentMethod
    card_number: Optional[str] = None
    expiry: Optional[str] = None
    cvv: Optional[str] = None

    def missing_card_fields(self) -> List[str]:
        if not self.method.is_card:
            return []
        fields = {'card_number': self.card_number, 'expiry': self.expiry, 'cvv': self.cvv}
        return [name for name, value in fields.items() if not (value or "").strip()]


class OrderSelection(BaseModel):
    """A product and quantity picked for checkout"""
    product: Product
    quantity: int = Field(..., ge=1)

    @property
    def total(self) -> Decimal:
        """Exact price x quantity, never rounded before persistence"""
        return self.product.price * self.quantity

    @property
    def display_total(self) -> str:
        return f"{self.total:.2f}"

    def to_dict(self) -> dict:
        return {
            'product': self.product.to_dict(),
            'quantity': self.quantity,
            'total': float(self.total),
            'display_total': self.display_total,
        }


class CheckoutRequest(BaseModel):
    """Checkout form as submitted by the purchaser"""
    product_id: RecordId
    quantity: int = 1
    shipping: ShippingInfo
    payment: PaymentDetails


class OrderCreate(BaseModel):
    """Schema for the single orders insert made at checkout"""
    user_email: str
    product_id: RecordId
    vendor_id: RecordId
    quantity: int = Field(..., ge=1)
    total: Decimal
    full_name: str
    address: str
    pin_code: str
    mobile: str
    payment_method: PaymentMethod
    status: str = DEFAULT_STATUS.value

    def to_record(self) -> dict:
        """Row payload for the backend (JSON-safe)"""
        data = self.model_dump()
        data['total'] = float(self.total)
        data['payment_method'] = self.payment_method.value
        return data


class OrderReceipt(BaseModel):
    """Confirmation shown after a successful checkout"""
    order_id: RecordId
    product_id: RecordId
    product_name: str
    quantity: int
    total: Decimal
    payment_method: PaymentMethod
    status: str = DEFAULT_STATUS.value

    @property
    def display_total(self) -> str:
        return f"{self.total:.2f}"

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['total'] = float(self.total)
        data['display_total'] = self.display_total
        data['payment_method'] = self.payment_method.value
        return data


# ================================================================================
# ORDER RECORD
# ================================================================================

class Order(BaseModel):
    """
    Order domain model - one purchase of one product

    Fields:
        id: Order ID (assigned by the backend on insert)
        user_email: Purchaser email
        product_id: Ordered product
        vendor_id: Vendor copied from the product at creation
        quantity: Units ordered
        total: price x quantity at placement time
        full_name, address, pin_code, mobile: Shipping snapshot
        payment_method: visa, mastercard or cod
        status: Stored fulfillment label (unset means processing)
        created_at: Creation timestamp
        product: Ordered product with images (purchaser history only)
    """

    id: RecordId = Field(..., description="Order ID")
    user_email: str = Field(..., description="Purchaser email")
    product_id: RecordId = Field(..., description="Product ID")
    vendor_id: RecordId = Field(..., description="Vendor ID")
    quantity: int = Field(..., description="Quantity ordered", ge=1)
    total: Decimal = Field(..., description="Order total", ge=0)

    # Shipping snapshot
    full_name: Optional[str] = None
    address: Optional[str] = None
    pin_code: Optional[str] = None
    mobile: Optional[str] = None

    payment_method: Optional[str] = None
    status: Optional[str] = Field(None, description="Fulfillment status")
    created_at: Optional[datetime] = None

    product: Optional[Product] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_encoders={
            Decimal: float,
            datetime: lambda v: v.isoformat()
        }
    )

    @property
    def display_status(self) -> str:
        return self.status or DEFAULT_STATUS.value

    @property
    def shipping(self) -> ShippingInfo:
        return ShippingInfo(
            full_name=self.full_name or "",
            address=self.address or "",
            pin_code=self.pin_code or "",
            mobile=self.mobile or "",
        )

    @property
    def is_terminal(self) -> bool:
        return parse_status(self.status) in TERMINAL_STATUSES

    def to_dict(self) -> dict:
        """Convert to dictionary with computed fields"""
        data = self.model_dump(exclude={'product'})
        data['total'] = float(self.total)
        data['display_total'] = f"{self.total:.2f}"
        data['display_status'] = self.display_status
        if self.created_at:
            data['created_at'] = self.created_at.isoformat()
        data['product'] = self.product.to_dict() if self.product else None
        return data
