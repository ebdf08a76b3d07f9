"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A cart was priced, stock reserved and the order committed as pending."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    phone_number = String(required=True)
    item_count = Integer(required=True)
    subtotal = Float(required=True)
    total_amount = Float(required=True)
    bcoins_used = Integer(default=0)
    bcoins_earned = Integer(default=0)
    payment_mode = String()
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An admin moved the order forward (or cancelled it)."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    phone_number = String()
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentRecorded:
    __version__ = 1

    order_id = Identifier(required=True)
    payment_status = String(required=True)
    amount = Float()
    recorded_at = DateTime(required=True)
