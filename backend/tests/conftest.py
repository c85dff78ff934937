"""
Pytest fixtures and configuration for Kisan Marketplace Backend tests

This file provides shared fixtures that can be used across all test modules.
No test talks to Supabase or Cloudinary: the backend is replaced by an
in-memory double with the same interface as DataBackend.
"""
import os

# Settings are read at import time
os.environ.setdefault("AUTH_SECRET", "test-secret")
os.environ.setdefault("ADMIN_EMAIL", "admin@kisan.test")
os.environ.setdefault("ADMIN_PASSWORD", "admin-pass")

import pytest
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from app.core.exceptions import AuthenticationError, BackendError


BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


class InMemoryBackend:
    """
    DataBackend double backed by dicts

    fail(operation, table, message) makes the next matching call raise
    BackendError with that message, like a backend rejection.
    """

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            'users': [], 'vendors': [], 'products': [], 'product_img': [], 'orders': []
        }
        self.calls: List[tuple] = []
        self.auth_users: Dict[str, Dict[str, str]] = {}
        self.uploads: List[tuple] = []
        self._failures: Dict[tuple, str] = {}
        self._next_id = 1

    def fail(self, operation: str, table: str, message: str):
        self._failures[(operation, table)] = message

    def _check_failure(self, operation: str, table: str):
        message = self._failures.pop((operation, table), None)
        if message is not None:
            raise BackendError(message)

    @staticmethod
    def _matches(row: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
        return all(str(row.get(column)) == str(value) for column, value in (filters or {}).items())

    def seed(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        record = dict(row)
        record.setdefault('id', self._next_id)
        if isinstance(record['id'], int):
            self._next_id = max(self._next_id, record['id'] + 1)
        record.setdefault('created_at', (BASE_TIME + timedelta(seconds=len(self.tables[table]))).isoformat())
        self.tables[table].append(record)
        return dict(record)

    def query(self, table, filters=None, columns="*", order_by=None, descending=False, limit=None):
        self.calls.append(('query', table, filters))
        self._check_failure('query', table)
        rows = [dict(row) for row in self.tables[table] if self._matches(row, filters)]
        if order_by:
            rows.sort(key=lambda row: (row.get(order_by) is None, row.get(order_by)), reverse=descending)
        if limit:
            rows = rows[:limit]
        return rows

    def query_one(self, table, filters, columns="*"):
        rows = self.query(table, filters=filters, columns=columns, limit=1)
        return rows[0] if rows else None

    def insert(self, table, record):
        self.calls.append(('insert', table, record))
        self._check_failure('insert', table)
        return self.seed(table, record)

    def update(self, table, key, patch):
        self.calls.append(('update', table, key, patch))
        self._check_failure('update', table)
        updated = []
        for row in self.tables[table]:
            if self._matches(row, key):
                row.update(patch)
                updated.append(dict(row))
        return updated

    def authenticate(self, email, password):
        self.calls.append(('authenticate', email))
        user = self.auth_users.get(email)
        if user is None or user['password'] != password:
            raise AuthenticationError("Invalid login credentials")
        return {'user_id': user['id'], 'email': email, 'access_token': 'supabase-token'}

    def sign_up(self, email, password):
        self.calls.append(('sign_up', email))
        self._check_failure('sign_up', 'auth')
        user_id = f"auth-{len(self.auth_users) + 1}"
        self.auth_users[email] = {'id': user_id, 'password': password}
        return user_id

    def upload_blob(self, content, filename, folder):
        self.calls.append(('upload_blob', folder))
        self._check_failure('upload_blob', 'storage')
        self.uploads.append((filename, folder, content))
        return f"https://res.cloudinary.test/{folder}/{filename}"

    def writes(self) -> List[tuple]:
        return [call for call in self.calls if call[0] in ('insert', 'update')]


@pytest.fixture
def backend():
    """Fresh in-memory backend per test"""
    return InMemoryBackend()


@pytest.fixture
def sample_vendor_data():
    return {
        'id': 7,
        'full_name': 'Ravi Farms',
        'email': 'ravi@farms.test',
        'mobile': '9876543210',
        'gst_id': '123456',
        'bank_name': 'State Bank',
        'account_number': '000111222',
        'ifsc_code': '654321',
        'branch_name': 'Nashik',
    }


@pytest.fixture
def sample_product_data():
    """
    Provides sample product data for tests
    """
    return {
        'id': 11,
        'name': 'Tomatoes (1 kg)',
        'category': 'Vegetables',
        'price': 250,
        'quantity': 40,
        'vendor_id': 7,
        'description': 'Farm fresh tomatoes',
    }


@pytest.fixture
def sample_order_data():
    """
    Provides sample order data for tests
    """
    return {
        'id': 42,
        'user_email': 'asha@buyer.test',
        'product_id': 11,
        'vendor_id': 7,
        'quantity': 3,
        'total': 750,
        'full_name': 'Asha Patil',
        'address': '12 Market Road, Pune',
        'pin_code': '411001',
        'mobile': '9123456780',
        'payment_method': 'cod',
        'status': 'processing',
    }


@pytest.fixture
def seeded_backend(backend, sample_vendor_data, sample_product_data, sample_order_data):
    """Backend with one vendor, one product and one processing order"""
    backend.seed('vendors', sample_vendor_data)
    backend.seed('products', sample_product_data)
    backend.seed('orders', sample_order_data)
    backend.calls.clear()
    return backend
