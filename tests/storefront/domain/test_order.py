from datetime import datetime

import pytest
from protean.exceptions import ValidationError
from storefront.errors import InvalidStatusTransition
from storefront.order.events import OrderPlaced, OrderStatusChanged, PaymentRecorded
from storefront.order.order import DELIVERY_WINDOW, Order, OrderStatus


def _lines(*pairs):
    """(unit_price, quantity) pairs to order lines."""
    return [
        {
            "product_id": f"prod-{index}",
            "product_name": f"Item {index}",
            "quantity": quantity,
            "unit_price": unit_price,
            "unit": "piece",
        }
        for index, (unit_price, quantity) in enumerate(pairs)
    ]


def _order(lines=None, bcoins_used=0):
    return Order.place(
        customer_id="cust-1",
        lines=lines or _lines((50.0, 2), (30.0, 1)),
        delivery_address="12 MG Road, Bengaluru",
        phone_number="9876543210",
        bcoins_used=bcoins_used,
    )


class TestPricing:
    def test_subtotal_is_sum_of_line_totals(self):
        order = _order(_lines((50.0, 2), (30.0, 1), (12.5, 4)))
        assert [item.total_price for item in order.items] == [100.0, 30.0, 50.0]
        assert order.subtotal == pytest.approx(sum(item.total_price for item in order.items))
        assert order.subtotal == pytest.approx(180.0)

    def test_total_without_bcoins(self):
        order = _order()
        assert order.total_amount == pytest.approx(130.0)
        assert order.bcoins_earned == 1

    def test_bcoins_reduce_total_one_to_one(self):
        order = _order(bcoins_used=5)
        assert order.total_amount == pytest.approx(125.0)
        # Earn is computed on the pre-discount amount
        assert order.bcoins_earned == 1

    def test_total_floors_at_zero(self):
        order = _order(_lines((20.0, 1)), bcoins_used=50)
        assert order.total_amount == 0.0
        assert order.bcoins_used == 50

    def test_small_order_earns_nothing(self):
        order = _order(_lines((20.0, 3)))
        assert order.bcoins_earned == 0

    def test_fractional_quantity_line(self):
        order = _order(_lines((40.0, 0.5)))
        assert order.items[0].total_price == pytest.approx(20.0)

    def test_empty_cart_rejected(self):
        with pytest.raises(ValidationError):
            Order.place(
                customer_id="cust-1",
                lines=[],
                delivery_address="12 MG Road",
                phone_number="9876543210",
            )


class TestPlacement:
    def test_initial_state(self):
        order = _order()
        assert order.status == "pending"
        assert order.payment_status == "pending"
        assert order.payment_mode == "cash_on_delivery"
        assert order.delivery_fee == 0.0

    def test_estimated_delivery_is_one_window_out(self):
        before = datetime.now()
        order = _order()
        assert before + DELIVERY_WINDOW <= order.estimated_delivery <= datetime.now() + DELIVERY_WINDOW

    def test_raises_order_placed(self):
        order = _order(bcoins_used=5)
        event = order._events[-1]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == str(order.id)
        assert event.total_amount == pytest.approx(125.0)
        assert event.item_count == 2
        assert event.bcoins_used == 5

    def test_invalid_payment_mode_rejected(self):
        with pytest.raises(ValidationError):
            Order.place(
                customer_id="cust-1",
                lines=_lines((10.0, 1)),
                delivery_address="12 MG Road",
                phone_number="9876543210",
                payment_mode="cheque",
            )


class TestStatusMachine:
    @pytest.mark.parametrize(
        "path",
        [
            ["confirmed", "preparing", "out_for_delivery", "delivered"],
            ["cancelled"],
            ["confirmed", "cancelled"],
            ["confirmed", "preparing", "cancelled"],
        ],
    )
    def test_allowed_paths(self, path):
        order = _order()
        for status in path:
            order.transition_to(status)
        assert order.status == path[-1]

    @pytest.mark.parametrize(
        "path, rejected",
        [
            ([], "out_for_delivery"),
            ([], "delivered"),
            ([], "preparing"),
            (["confirmed"], "pending"),
            (["confirmed", "preparing", "out_for_delivery"], "cancelled"),
            (["confirmed", "preparing", "out_for_delivery", "delivered"], "cancelled"),
            (["cancelled"], "confirmed"),
            ([], "pending"),
        ],
    )
    def test_rejected_transitions_leave_status_unchanged(self, path, rejected):
        order = _order()
        for status in path:
            order.transition_to(status)
        before = order.status

        with pytest.raises(InvalidStatusTransition) as exc:
            order.transition_to(rejected)

        assert exc.value.code == "invalid_status_transition"
        assert order.status == before

    def test_unknown_status_is_a_validation_error(self):
        order = _order()
        with pytest.raises(ValidationError) as exc:
            order.transition_to("shipped")
        assert not isinstance(exc.value, InvalidStatusTransition)

    def test_terminal_states_have_no_exits(self):
        for terminal in ("delivered", "cancelled"):
            order = _order()
            order.status = terminal
            assert not any(order.can_transition_to(status) for status in OrderStatus)

    def test_transition_raises_event(self):
        order = _order()
        order.transition_to("confirmed")
        event = order._events[-1]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "pending"
        assert event.new_status == "confirmed"
        assert event.phone_number == "9876543210"


class TestPayment:
    def test_record_paid(self):
        order = _order()
        order.record_payment("paid")
        assert order.payment_status == "paid"
        assert isinstance(order._events[-1], PaymentRecorded)

    def test_record_failed(self):
        order = _order()
        order.record_payment("failed")
        assert order.payment_status == "failed"

    def test_pending_cannot_be_recorded(self):
        order = _order()
        with pytest.raises(ValidationError):
            order.record_payment("pending")

    def test_unknown_outcome_rejected(self):
        order = _order()
        with pytest.raises(ValidationError):
            order.record_payment("refunded")

    def test_cancelled_order_rejects_payment(self):
        order = _order()
        order.transition_to("cancelled")
        with pytest.raises(ValidationError):
            order.record_payment("paid")
