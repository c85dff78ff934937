"""
Fulfillment Service
Lets a vendor inspect and advance the status of orders for their products.

Status changes are confirm-then-reflect: the board shown to the vendor is
only changed after the backend reports the update succeeded. On failure the
error propagates and the board keeps the previous status.
"""
import logging
from typing import List, Optional

from app.core.config import settings
from app.core.database import DataBackend
from app.core.exceptions import NotFoundError
from app.domain.order import Order, StatusPolicy, validate_transition
from app.domain.product import RecordId
from app.repositories.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class VendorOrderBoard:
    """A vendor's orders as last confirmed by the backend"""

    def __init__(self, vendor_id: RecordId, orders: List[Order]):
        self.vendor_id = vendor_id
        self.orders = list(orders)

    def get(self, order_id: RecordId) -> Optional[Order]:
        for order in self.orders:
            if str(order.id) == str(order_id):
                return order
        return None

    def replace(self, updated: Order):
        for index, order in enumerate(self.orders):
            if str(order.id) == str(updated.id):
                self.orders[index] = updated
                return

    def status_of(self, order_id: RecordId) -> Optional[str]:
        order = self.get(order_id)
        return order.display_status if order else None

    def __len__(self) -> int:
        return len(self.orders)


class FulfillmentService:
    """Service for vendor order fulfillment"""

    def __init__(self, backend: DataBackend, policy: Optional[StatusPolicy] = None):
        self.orders = OrderRepository(backend)
        self.policy = policy or StatusPolicy(settings.ORDER_STATUS_POLICY)

    def load_board(self, vendor_id: RecordId) -> VendorOrderBoard:
        """Fetch the vendor's orders, newest first"""
        return VendorOrderBoard(vendor_id, self.orders.find_by_vendor(vendor_id))

    def advance(self, board: VendorOrderBoard, order_id: RecordId, new_status: str) -> Order:
        """
        Move one order of the board to new_status

        Args:
            board: Vendor board the order is listed on
            order_id: Order to update
            new_status: Requested status

        Returns:
            The updated order (also reflected on the board)

        Raises:
            NotFoundError: order not on the board or not owned by the vendor
            InvalidTransitionError: refused by the status policy
            BackendError: update failed; the board is unchanged
        """
        current = board.get(order_id)
        if current is None:
            raise NotFoundError(f"Order {order_id} not found")

        target = validate_transition(current.status, new_status, self.policy)
        updated = self.orders.update_status(order_id, board.vendor_id, target)

        board.replace(updated)
        logger.info(f"Order {order_id}: {current.display_status} -> {target} (vendor {board.vendor_id})")
        return updated

    def update_status(self, vendor_id: RecordId, order_id: RecordId, new_status: str) -> Order:
        """Stateless variant of advance() used by the HTTP API"""
        order = self.orders.find_by_id(order_id)
        if order is None or str(order.vendor_id) != str(vendor_id):
            raise NotFoundError(f"Order {order_id} not found")

        board = VendorOrderBoard(vendor_id, [order])
        return self.advance(board, order_id, new_status)
