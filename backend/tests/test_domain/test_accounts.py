"""
Unit tests for vendor and purchaser registration forms
"""
import pytest

from app.domain.user import PurchaserRegistration
from app.domain.vendor import Vendor, VendorRegistration


@pytest.fixture
def vendor_form():
    return {
        'full_name': 'Ravi Farms',
        'mobile': '9876543210',
        'email': 'ravi@farms.test',
        'gst_id': '123456',
        'bank_name': 'State Bank',
        'account_number': '000111222',
        'ifsc_code': '654321',
        'branch_name': 'Nashik',
        'password': 'secret1',
        'confirm_password': 'secret1',
    }


@pytest.fixture
def purchaser_form():
    return {
        'full_name': 'Asha Patil',
        'mobile': '9123456780',
        'address': '12 Market Road, Pune',
        'email': 'asha@buyer.test',
        'password': 'secret1',
        'confirm_password': 'secret1',
    }


class TestVendorRegistration:
    def test_valid_form_has_no_errors(self, vendor_form):
        assert VendorRegistration(**vendor_form).validation_errors() == {}

    def test_every_bad_field_is_reported(self, vendor_form):
        # Arrange
        vendor_form.update({
            'mobile': '98765',
            'email': 'not-an-email',
            'gst_id': 'GST12',
            'ifsc_code': 'SBIN0001',
            'password': 'abc',
            'confirm_password': 'abcd',
        })

        # Act
        errors = VendorRegistration(**vendor_form).validation_errors()

        # Assert
        assert set(errors) == {'mobile', 'email', 'gst_id', 'ifsc_code', 'password', 'confirm_password'}
        assert errors['password'] == 'Password must be at least 6 characters'
        assert errors['confirm_password'] == 'Passwords do not match'

    def test_record_replaces_password_with_hash(self, vendor_form):
        record = VendorRegistration(**vendor_form).to_record("bcrypt-hash")

        assert record['hashed_password'] == "bcrypt-hash"
        assert 'password' not in record
        assert 'confirm_password' not in record

    def test_vendor_hash_never_serialized(self, sample_vendor_data):
        vendor = Vendor(**sample_vendor_data, hashed_password="bcrypt-hash")

        assert vendor.hashed_password == "bcrypt-hash"
        assert 'hashed_password' not in vendor.to_dict()


class TestPurchaserRegistration:
    def test_valid_form(self, purchaser_form):
        assert PurchaserRegistration(**purchaser_form).first_error() is None

    @pytest.mark.parametrize("changes,expected", [
        ({'address': ''}, 'Please fill all fields'),
        ({'confirm_password': 'other1'}, 'Passwords do not match'),
        ({'mobile': '12345'}, 'Mobile number must be 10 digits'),
        ({'email': 'asha@buyer'}, 'Please enter a valid email address'),
        ({'mobile': '12345', 'confirm_password': 'other1'}, 'Passwords do not match'),
    ])
    def test_first_error_follows_form_order(self, purchaser_form, changes, expected):
        purchaser_form.update(changes)
        assert PurchaserRegistration(**purchaser_form).first_error() == expected

    def test_profile_record_has_no_password(self, purchaser_form):
        record = PurchaserRegistration(**purchaser_form).to_profile_record()
        assert record == {
            'full_name': 'Asha Patil',
            'mobile': '9123456780',
            'address': '12 Market Road, Pune',
            'email': 'asha@buyer.test',
        }
