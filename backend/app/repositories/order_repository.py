"""
Order Repository - Data Access Layer for Orders

Handles all backend queries for orders and returns Order domain models.
"""
from collections import Counter
from typing import Any, Dict, List, Optional

from app.core.database import DataBackend
from app.core.exceptions import NotFoundError
from app.domain.order import Order, OrderCreate
from app.domain.product import Product, RecordId


# Order row with its product and the product's images embedded
ORDER_WITH_PRODUCT = "*, products:product_id (*, product_img (img_url))"


class OrderRepository:
    """
    Repository for Order data access

    All table access for orders is centralized here.
    """

    def __init__(self, backend: DataBackend):
        self.backend = backend

    @staticmethod
    def _to_order(row: Dict[str, Any]) -> Order:
        """Build an Order, folding an embedded product (if any) into Order.product"""
        data = dict(row)
        embedded = data.pop('products', None)
        if embedded:
            images = embedded.pop('product_img', None) or []
            embedded['image_urls'] = [image['img_url'] for image in images]
            data['product'] = Product(**embedded)
        return Order(**data)

    def create(self, order: OrderCreate) -> Order:
        """
        Insert one order

        Returns:
            Order as assigned by the backend (with its ID)
        """
        row = self.backend.insert('orders', order.to_record())
        return self._to_order(row)

    def find_by_id(self, order_id: RecordId) -> Optional[Order]:
        row = self.backend.query_one('orders', {'id': order_id})
        return self._to_order(row) if row else None

    def find_by_purchaser(self, email: str) -> List[Order]:
        """
        Purchaser order history, newest first, with product and images

        Args:
            email: Purchaser email
        """
        rows = self.backend.query(
            'orders',
            filters={'user_email': email},
            columns=ORDER_WITH_PRODUCT,
            order_by='created_at',
            descending=True
        )
        return [self._to_order(row) for row in rows]

    def find_by_vendor(self, vendor_id: RecordId) -> List[Order]:
        """Orders referencing the vendor's products, newest first"""
        rows = self.backend.query(
            'orders',
            filters={'vendor_id': vendor_id},
            order_by='created_at',
            descending=True
        )
        return [self._to_order(row) for row in rows]

    def update_status(self, order_id: RecordId, vendor_id: RecordId, status: str) -> Order:
        """
        Set the status of an order owned by vendor_id

        Raises:
            NotFoundError: no order with this ID belongs to the vendor
        """
        rows = self.backend.update(
            'orders',
            key={'id': order_id, 'vendor_id': vendor_id},
            patch={'status': status}
        )
        if not rows:
            raise NotFoundError(f"Order {order_id} not found")
        return self._to_order(rows[0])

    def find_all(self, limit: Optional[int] = None) -> List[Order]:
        rows = self.backend.query('orders', order_by='created_at', descending=True, limit=limit)
        return [self._to_order(row) for row in rows]

    def get_stats(self) -> Dict[str, Any]:
        """
        Get order statistics

        Returns:
            Dict with total_orders, total_revenue and by_status counts
            (unset status counted as processing)
        """
        rows = self.backend.query('orders', columns='status, total')
        by_status = Counter((row.get('status') or 'processing') for row in rows)
        return {
            'total_orders': len(rows),
            'total_revenue': float(sum(row.get('total') or 0 for row in rows)),
            'by_status': dict(by_status),
        }
