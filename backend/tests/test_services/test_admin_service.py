"""
Unit tests for AdminService
"""
import pytest

from app.core.exceptions import NotFoundError
from app.services.admin_service import AdminService


class TestAdminService:
    def test_overview(self, seeded_backend, sample_order_data):
        # Arrange
        seeded_backend.seed('users', {'email': 'asha@buyer.test', 'full_name': 'Asha Patil'})
        seeded_backend.seed('orders', {**sample_order_data, 'id': 43, 'total': 250, 'status': None})
        seeded_backend.seed('orders', {**sample_order_data, 'id': 44, 'total': 100, 'status': 'shipped'})

        # Act
        overview = AdminService(seeded_backend).overview()

        # Assert
        assert overview['users'] == 1
        assert overview['vendors'] == 1
        assert overview['products'] == 1
        assert overview['orders'] == {
            'total_orders': 3,
            'total_revenue': 1100.0,
            'by_status': {'processing': 2, 'shipped': 1},
        }

    def test_vendor_rows_hide_password_hash(self, seeded_backend):
        seeded_backend.tables['vendors'][0]['hashed_password'] = '$2b$12$hash'

        rows = AdminService(seeded_backend).list_table('vendors')

        assert rows[0]['full_name'] == 'Ravi Farms'
        assert 'hashed_password' not in rows[0]

    def test_order_rows(self, seeded_backend):
        rows = AdminService(seeded_backend).list_table('orders')
        assert rows[0]['display_total'] == '750.00'

    def test_unknown_table(self, seeded_backend):
        with pytest.raises(NotFoundError, match='Available'):
            AdminService(seeded_backend).list_table('product_img')
