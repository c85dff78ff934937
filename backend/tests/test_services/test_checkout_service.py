"""
Unit tests for CheckoutService

These tests run against the in-memory backend; no Supabase connection is needed.
"""
import pytest
from unittest.mock import patch
from decimal import Decimal

from app.core.exceptions import BackendError, NotFoundError, ValidationError
from app.core.idempotency import IdempotencyCache
from app.domain.order import CheckoutRequest, PaymentDetails, PaymentMethod, ShippingInfo
from app.services.checkout_service import CheckoutService

BUYER = 'asha@buyer.test'


@pytest.fixture
def service(seeded_backend):
    return CheckoutService(seeded_backend, idempotency_cache=IdempotencyCache(ttl_seconds=600))


@pytest.fixture
def shipping():
    return ShippingInfo(full_name='Asha Patil', address='12 Market Road, Pune', pin_code='411001', mobile='9123456780')


def order_inserts(backend):
    return [call for call in backend.writes() if call[:2] == ('insert', 'orders')]


class TestSelect:
    def test_select_computes_total(self, service):
        selection = service.select(11, 3)

        assert selection.product.name == 'Tomatoes (1 kg)'
        assert selection.quantity == 3
        assert selection.total == Decimal('750')

    @pytest.mark.parametrize("requested", [0, -4])
    def test_quantity_clamped_to_one(self, service, requested):
        assert service.select(11, requested).quantity == 1

    def test_no_stock_check(self, service):
        # 40 on hand, quantity is informational only
        assert service.select(11, 500).quantity == 500

    def test_unknown_product(self, service):
        with pytest.raises(NotFoundError):
            service.select(999, 1)


class TestPrefillShipping:
    def test_prefilled_from_profile(self, service, seeded_backend):
        seeded_backend.seed('users', {
            'email': BUYER, 'full_name': 'Asha Patil', 'mobile': '9123456780', 'address': 'Pune'
        })

        shipping = service.prefill_shipping(BUYER)

        assert shipping.full_name == 'Asha Patil'
        assert shipping.address == 'Pune'
        assert shipping.mobile == '9123456780'
        assert shipping.pin_code == ''

    def test_empty_without_profile(self, service):
        assert service.prefill_shipping('nobody@buyer.test') == ShippingInfo()


class TestSubmit:
    """Submitting an order: validation, single insert, receipt"""

    def test_cash_on_delivery_order(self, service, seeded_backend, shipping):
        # Arrange
        selection = service.select(11, 3)
        payment = PaymentDetails(method=PaymentMethod.COD)

        # Act
        receipt = service.submit(BUYER, selection, shipping, payment)

        # Assert
        assert receipt.total == Decimal('750')
        assert receipt.display_total == "750.00"
        assert receipt.status == 'processing'
        assert receipt.product_name == 'Tomatoes (1 kg)'

        inserts = order_inserts(seeded_backend)
        assert len(inserts) == 1
        record = inserts[0][2]
        assert record['total'] == 750
        assert record['vendor_id'] == 7
        assert record['user_email'] == BUYER
        assert record['payment_method'] == 'cod'
        assert record['pin_code'] == '411001'
        assert 'card_number' not in record

    def test_card_order_with_empty_card_number(self, service, seeded_backend, shipping):
        selection = service.select(11, 1)
        payment = PaymentDetails(method='visa', card_number='', expiry='12/27', cvv='123')

        with pytest.raises(ValidationError, match="card details: card_number"):
            service.submit(BUYER, selection, shipping, payment)

        assert seeded_backend.writes() == []

    def test_missing_shipping_field(self, service, seeded_backend):
        selection = service.select(11, 1)
        shipping = ShippingInfo(full_name='Asha', address='Pune', pin_code='', mobile='9123456780')

        with pytest.raises(ValidationError, match="pin_code"):
            service.submit(BUYER, selection, shipping, PaymentDetails(method='cod'))

        assert seeded_backend.writes() == []

    def test_card_order_with_all_fields(self, service, seeded_backend, shipping):
        payment = PaymentDetails(method='mastercard', card_number='5555444433332222', expiry='01/28', cvv='999')

        receipt = service.submit(BUYER, service.select(11, 2), shipping, payment)

        assert receipt.payment_method == PaymentMethod.MASTERCARD
        record = order_inserts(seeded_backend)[0][2]
        assert 'cvv' not in record
        assert record['total'] == 500

    def test_backend_failure_leaves_nothing_behind(self, service, seeded_backend, shipping):
        # Arrange
        selection = service.select(11, 3)
        seeded_backend.fail('insert', 'orders', 'duplicate key value violates unique constraint')
        orders_before = list(seeded_backend.tables['orders'])

        # Act / Assert
        with pytest.raises(BackendError) as exc_info:
            service.submit(BUYER, selection, shipping, PaymentDetails(method='cod'))

        assert exc_info.value.message == 'duplicate key value violates unique constraint'
        assert seeded_backend.tables['orders'] == orders_before
        # No retry
        assert len(order_inserts(seeded_backend)) == 1


class TestIdempotency:
    def test_same_key_inserts_once(self, service, seeded_backend, shipping):
        selection = service.select(11, 3)
        payment = PaymentDetails(method='cod')

        first = service.submit(BUYER, selection, shipping, payment, idempotency_key='attempt-1')
        second = service.submit(BUYER, selection, shipping, payment, idempotency_key='attempt-1')

        assert first.order_id == second.order_id
        assert len(order_inserts(seeded_backend)) == 1

    def test_keys_are_scoped_per_purchaser(self, service, seeded_backend, shipping):
        selection = service.select(11, 1)
        payment = PaymentDetails(method='cod')

        service.submit(BUYER, selection, shipping, payment, idempotency_key='attempt-1')
        service.submit('other@buyer.test', selection, shipping, payment, idempotency_key='attempt-1')

        assert len(order_inserts(seeded_backend)) == 2

    def test_without_key_every_submit_inserts(self, service, seeded_backend, shipping):
        selection = service.select(11, 1)
        payment = PaymentDetails(method='cod')

        service.submit(BUYER, selection, shipping, payment)
        service.submit(BUYER, selection, shipping, payment)

        assert len(order_inserts(seeded_backend)) == 2

    def test_failed_attempt_is_not_cached(self, service, seeded_backend, shipping):
        selection = service.select(11, 1)
        payment = PaymentDetails(method='cod')
        seeded_backend.fail('insert', 'orders', 'timeout')

        with pytest.raises(BackendError):
            service.submit(BUYER, selection, shipping, payment, idempotency_key='attempt-1')
        receipt = service.submit(BUYER, selection, shipping, payment, idempotency_key='attempt-1')

        assert receipt.order_id is not None
        assert len(seeded_backend.tables['orders']) == 2


class TestPlaceOrder:
    def test_place_order(self, service, seeded_backend, shipping):
        request = CheckoutRequest(
            product_id=11, quantity=3, shipping=shipping, payment=PaymentDetails(method='cod')
        )

        receipt = service.place_order(BUYER, request, idempotency_key='k1')

        assert receipt.total == Decimal('750')
        assert len(seeded_backend.tables['orders']) == 2

    def test_replay_checks_cache_once_per_call(self, seeded_backend, shipping):
        # Arrange
        cache = IdempotencyCache(ttl_seconds=600)
        service = CheckoutService(seeded_backend, idempotency_cache=cache)
        request = CheckoutRequest(
            product_id=11, quantity=2, shipping=shipping, payment=PaymentDetails(method='cod')
        )
        first = service.place_order(BUYER, request, idempotency_key='k1')

        # Act
        with patch.object(cache, 'get', wraps=cache.get) as mock_get:
            second = service.place_order(BUYER, request, idempotency_key='k1')

        # Assert
        assert second.order_id == first.order_id
        assert mock_get.call_count == 1
        assert len(order_inserts(seeded_backend)) == 1

    def test_validation_runs_before_any_backend_call(self, service, seeded_backend):
        request = CheckoutRequest(
            product_id=11, shipping=ShippingInfo(), payment=PaymentDetails(method='cod')
        )

        with pytest.raises(ValidationError):
            service.place_order(BUYER, request)

        assert seeded_backend.calls == []
