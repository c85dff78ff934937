"""
Admin Service
Read-only data viewer over the marketplace tables.
"""
from typing import Any, Dict, List

from app.core.database import DataBackend
from app.core.exceptions import NotFoundError
from app.repositories.order_repository import OrderRepository
from app.repositories.product_repository import ProductRepository
from app.repositories.user_repository import UserRepository
from app.repositories.vendor_repository import VendorRepository


VIEWABLE_TABLES = ('users', 'vendors', 'products', 'orders')


class AdminService:
    """Service backing the admin dashboard"""

    def __init__(self, backend: DataBackend):
        self.users = UserRepository(backend)
        self.vendors = VendorRepository(backend)
        self.products = ProductRepository(backend)
        self.orders = OrderRepository(backend)

    def overview(self) -> Dict[str, Any]:
        """
        Dashboard counters

        Returns:
            Dict with users, vendors, products counts and order stats
        """
        return {
            'users': len(self.users.find_all()),
            'vendors': len(self.vendors.find_all()),
            'products': self.products.count(),
            'orders': self.orders.get_stats(),
        }

    def list_table(self, table: str) -> List[Dict[str, Any]]:
        """
        Rows of one table (vendor password hashes are never included)

        Raises:
            NotFoundError: table is not viewable
        """
        if table == 'users':
            return [user.model_dump() for user in self.users.find_all()]
        if table == 'vendors':
            return [vendor.to_dict() for vendor in self.vendors.find_all()]
        if table == 'products':
            return [product.to_dict() for product in self.products.find_all()]
        if table == 'orders':
            return [order.to_dict() for order in self.orders.find_all()]
        raise NotFoundError(f"Unknown table '{table}'. Available: {', '.join(VIEWABLE_TABLES)}")
