"""
Vendor Repository - Data Access Layer for Vendors
"""
from typing import List, Optional

from app.core.database import DataBackend
from app.domain.product import RecordId
from app.domain.vendor import Vendor


class VendorRepository:
    """Repository for Vendor data access"""

    def __init__(self, backend: DataBackend):
        self.backend = backend

    def find_by_email(self, email: str) -> Optional[Vendor]:
        row = self.backend.query_one('vendors', {'email': email})
        return Vendor(**row) if row else None

    def find_by_id(self, vendor_id: RecordId) -> Optional[Vendor]:
        row = self.backend.query_one('vendors', {'id': vendor_id})
        return Vendor(**row) if row else None

    def create(self, record: dict) -> Vendor:
        return Vendor(**self.backend.insert('vendors', record))

    def find_all(self) -> List[Vendor]:
        rows = self.backend.query('vendors', order_by='created_at')
        return [Vendor(**row) for row in rows]
