"""
Orders API Endpoints
Checkout for purchasers, fulfillment for vendors
"""
from fastapi import APIRouter, Depends, Header, Query, status
from typing import Optional
from pydantic import BaseModel

from app.core.auth import TokenUser, require_purchaser, require_vendor
from app.core.database import DataBackend, get_data_backend
from app.core.exceptions import MarketplaceError, to_http_exception
from app.domain.order import CheckoutRequest, PaymentMethod
from app.repositories.order_repository import OrderRepository
from app.services.checkout_service import CheckoutService
from app.services.fulfillment_service import FulfillmentService

router = APIRouter()


class StatusUpdate(BaseModel):
    status: str


# =============================================================================
# Purchaser: checkout and history
# =============================================================================

@router.get("/checkout/{product_id}")
async def start_checkout(
    product_id: str,
    quantity: int = Query(1, description="Units to buy (values below 1 count as 1)"),
    user: TokenUser = Depends(require_purchaser),
    backend: DataBackend = Depends(get_data_backend)
):
    """
    Checkout form data

    Returns the selection with its total, the shipping form pre-filled from
    the purchaser profile and the accepted payment methods
    """
    try:
        service = CheckoutService(backend)
        selection = service.select(product_id, quantity)
        shipping = service.prefill_shipping(user.email)
        return {
            "status": "success",
            "data": {
                "selection": selection.to_dict(),
                "shipping": shipping.model_dump(),
                "payment_methods": [method.value for method in PaymentMethod],
            }
        }
    except MarketplaceError as e:
        raise to_http_exception(e)


@router.post("/", status_code=status.HTTP_201_CREATED)
async def place_order(
    request: CheckoutRequest,
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
    user: TokenUser = Depends(require_purchaser),
    backend: DataBackend = Depends(get_data_backend)
):
    """
    Place an order for one product

    A retry carrying the same Idempotency-Key returns the first receipt
    instead of creating a second order.
    """
    try:
        receipt = CheckoutService(backend).place_order(user.email, request, idempotency_key=idempotency_key)
        return {"status": "success", "data": receipt.to_dict()}
    except MarketplaceError as e:
        raise to_http_exception(e)


@router.get("/mine")
async def get_my_orders(
    user: TokenUser = Depends(require_purchaser),
    backend: DataBackend = Depends(get_data_backend)
):
    """Purchaser order history, newest first, with product and images"""
    try:
        orders = OrderRepository(backend).find_by_purchaser(user.email)
        return {"status": "success", "count": len(orders), "data": [order.to_dict() for order in orders]}
    except MarketplaceError as e:
        raise to_http_exception(e)


# =============================================================================
# Vendor: fulfillment
# =============================================================================

@router.get("/vendor")
async def get_vendor_orders(
    vendor: TokenUser = Depends(require_vendor),
    backend: DataBackend = Depends(get_data_backend)
):
    """Orders for the calling vendor's products, newest first"""
    try:
        board = FulfillmentService(backend).load_board(vendor.id)
        return {"status": "success", "count": len(board), "data": [order.to_dict() for order in board.orders]}
    except MarketplaceError as e:
        raise to_http_exception(e)


@router.patch("/{order_id}/status")
async def update_order_status(
    order_id: str,
    update: StatusUpdate,
    vendor: TokenUser = Depends(require_vendor),
    backend: DataBackend = Depends(get_data_backend)
):
    """
    Change the status of one of the vendor's orders

    Returns the order as confirmed by the backend
    """
    try:
        order = FulfillmentService(backend).update_status(vendor.id, order_id, update.status)
        return {"status": "success", "data": order.to_dict()}
    except MarketplaceError as e:
        raise to_http_exception(e)
