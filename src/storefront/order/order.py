"""Order aggregate: line snapshots, bcoin pricing and the delivery status machine.

State Machine:
    pending → confirmed → preparing → out_for_delivery → delivered
    cancelled (from pending, confirmed, preparing)

delivered and cancelled are terminal. Line snapshots, the delivery address
and the phone number are copied in at placement and never rewritten.
"""

from datetime import datetime, timedelta
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.errors import InvalidStatusTransition
from storefront.loyalty.transaction import bcoins_earned_for
from storefront.order.events import OrderPlaced, OrderStatusChanged, PaymentRecorded

# Promised delivery time from the moment an order is placed
DELIVERY_WINDOW = timedelta(hours=24)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMode(Enum):
    CASH_ON_DELIVERY = "cash_on_delivery"
    ONLINE = "online"
    BCOINS = "bcoins"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.OUT_FOR_DELIVERY, OrderStatus.CANCELLED},
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def parse_status(value) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError({"status": [f"Invalid status: {value}"]}) from None


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A purchased line, frozen at the price and name the buyer saw."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Float(required=True, min_value=0.0)
    unit_price = Float(required=True, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)
    unit = String(max_length=10, default="piece")


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    subtotal = Float(default=0.0, min_value=0.0)
    total_amount = Float(default=0.0, min_value=0.0)
    delivery_address = Text(required=True)
    phone_number = String(required=True, max_length=20)
    payment_mode = String(choices=PaymentMode, default=PaymentMode.CASH_ON_DELIVERY.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    bcoins_used = Integer(default=0, min_value=0)
    bcoins_earned = Integer(default=0, min_value=0)
    delivery_fee = Float(default=0.0, min_value=0.0)
    estimated_delivery = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        lines,
        delivery_address,
        phone_number,
        payment_mode=PaymentMode.CASH_ON_DELIVERY.value,
        bcoins_used=0,
    ):
        """Price a cart and open a pending order for it.

        Args:
            customer_id: The buyer.
            lines: List of dicts with product_id, product_name, quantity,
                   unit_price and unit, in the order they were submitted.
            delivery_address: Address text captured at checkout.
            phone_number: Contact number captured at checkout.
            payment_mode: One of ``PaymentMode``.
            bcoins_used: Bcoins the buyer redeems against this order. Each
                         one takes one currency unit off the subtotal.
        """
        if not lines:
            raise ValidationError({"items": ["Order must contain at least one item"]})

        bcoins_used = bcoins_used or 0
        now = datetime.now()

        items = [
            OrderItem(
                product_id=line["product_id"],
                product_name=line["product_name"],
                quantity=line["quantity"],
                unit_price=line["unit_price"],
                total_price=line["unit_price"] * line["quantity"],
                unit=line.get("unit") or "piece",
            )
            for line in lines
        ]
        subtotal = sum(item.total_price for item in items)
        total_amount = max(0.0, subtotal - bcoins_used)

        order = cls(
            customer_id=customer_id,
            items=items,
            subtotal=subtotal,
            total_amount=total_amount,
            delivery_address=delivery_address,
            phone_number=phone_number,
            payment_mode=payment_mode or PaymentMode.CASH_ON_DELIVERY.value,
            bcoins_used=bcoins_used,
            bcoins_earned=bcoins_earned_for(total_amount + bcoins_used),
            estimated_delivery=now + DELIVERY_WINDOW,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                phone_number=phone_number,
                item_count=len(items),
                subtotal=subtotal,
                total_amount=total_amount,
                bcoins_used=bcoins_used,
                bcoins_earned=order.bcoins_earned,
                payment_mode=order.payment_mode,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status machine
    # -------------------------------------------------------------------
    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _VALID_TRANSITIONS.get(OrderStatus(self.status), set())

    def transition_to(self, status):
        target = parse_status(status)
        if not self.can_transition_to(target):
            raise InvalidStatusTransition(current=self.status, requested=target.value)

        previous = self.status
        now = datetime.now()
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                phone_number=self.phone_number,
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def record_payment(self, payment_status):
        """Record a confirmed payment outcome; ``pending`` cannot be recorded."""
        try:
            outcome = PaymentStatus(payment_status)
        except ValueError:
            raise ValidationError({"payment_status": [f"Invalid payment status: {payment_status}"]}) from None

        if outcome == PaymentStatus.PENDING:
            raise ValidationError({"payment_status": ["Only a paid or failed outcome can be recorded"]})
        if OrderStatus(self.status) == OrderStatus.CANCELLED:
            raise ValidationError({"payment_status": ["Cannot record payment on a cancelled order"]})

        now = datetime.now()
        self.payment_status = outcome.value
        self.updated_at = now

        self.raise_(
            PaymentRecorded(
                order_id=str(self.id),
                payment_status=outcome.value,
                amount=self.total_amount,
                recorded_at=now,
            )
        )
