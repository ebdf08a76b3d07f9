import pytest
from protean import current_domain
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from storefront.domain import storefront
from storefront.errors import ConcurrencyConflict, InvalidStatusTransition, NotAuthorized
from storefront.order.order import Order
from storefront.order.placement import place_order
from storefront.order.status import update_order_status


@pytest.fixture()
def order_id(make_product, make_customer):
    product = make_product()
    buyer = make_customer()
    return place_order(
        customer_id=str(buyer.id),
        items=[{"product_id": product.id, "quantity": 1}],
        delivery_address="4 Lake View, Chennai",
        phone_number="9123456780",
    )


@pytest.fixture()
def admin(make_customer):
    return make_customer(role="admin", name="Store Admin")


def _status(order_id):
    return current_domain.repository_for(Order).get(order_id).status


class TestUpdateOrderStatus:
    def test_admin_walks_the_happy_path(self, order_id, admin):
        for status in ("confirmed", "preparing", "out_for_delivery", "delivered"):
            update_order_status(admin, order_id, status)
            assert _status(order_id) == status

    def test_pending_to_out_for_delivery_rejected(self, order_id, admin):
        with pytest.raises(InvalidStatusTransition):
            update_order_status(admin, order_id, "out_for_delivery")
        assert _status(order_id) == "pending"

    def test_cancel_after_dispatch_rejected(self, order_id, admin):
        for status in ("confirmed", "preparing", "out_for_delivery"):
            update_order_status(admin, order_id, status)

        with pytest.raises(InvalidStatusTransition):
            update_order_status(admin, order_id, "cancelled")
        assert _status(order_id) == "out_for_delivery"

    def test_unknown_status_rejected(self, order_id, admin):
        with pytest.raises(ValidationError):
            update_order_status(admin, order_id, "teleported")

    def test_non_admin_rejected(self, order_id, make_customer):
        shopper = make_customer()
        with pytest.raises(NotAuthorized):
            update_order_status(shopper, order_id, "confirmed")
        assert _status(order_id) == "pending"

    def test_missing_order(self, admin):
        with pytest.raises(ObjectNotFoundError):
            update_order_status(admin, "no-such-order", "confirmed")

    def test_concurrent_update_surfaces_as_conflict(self, order_id, admin, monkeypatch):
        def stale(command, asynchronous=True):
            raise ExpectedVersionError("stale order")

        monkeypatch.setattr(storefront, "process", stale)
        with pytest.raises(ConcurrencyConflict):
            update_order_status(admin, order_id, "confirmed")

    def test_cancellation_does_not_restock(self, order_id, admin):
        from storefront.product.product import Product

        order = current_domain.repository_for(Order).get(order_id)
        product_id = order.items[0].product_id
        update_order_status(admin, order_id, "cancelled")

        assert current_domain.repository_for(Product).get(product_id).stock == 9
