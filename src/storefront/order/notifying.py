"""Texts the buyer (and the store owner) as orders are placed and move along.

Runs after the order has committed. Nothing here may fail an order: every
send is wrapped and failures are only logged.
"""

from protean.utils.mixins import handle

from notifications.dispatcher import notify
from notifications.templates import NewOrderAlertTemplate, OrderPlacedTemplate, get_status_template
from storefront.config import store_name, store_owner_phone
from storefront.domain import logger, storefront
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import Order


def _send_quietly(phone_number, message, **log_context):
    try:
        result = notify(phone_number, message)
    except Exception as exc:
        logger.error("Notification raised", error=str(exc), **log_context)
        return None

    if result["status"] != "sent":
        logger.warning("Notification failed", error=result.get("error"), **log_context)
    return result


@storefront.event_handler(part_of=Order)
class OrderNotificationHandler:
    """Sends order SMS messages once the change is durable."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        context = {
            "store_name": store_name(),
            "order_id": str(event.order_id),
            "total_amount": f"{event.total_amount:.2f}",
            "bcoins_earned": event.bcoins_earned,
            "item_count": event.item_count,
            "phone_number": event.phone_number,
        }

        _send_quietly(
            event.phone_number,
            OrderPlacedTemplate.render(context),
            order_id=context["order_id"],
            recipient="buyer",
        )

        owner_phone = store_owner_phone()
        if owner_phone:
            _send_quietly(
                owner_phone,
                NewOrderAlertTemplate.render(context),
                order_id=context["order_id"],
                recipient="owner",
            )

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        if not event.phone_number:
            logger.info("Status SMS skipped, no phone number", order_id=str(event.order_id))
            return

        template = get_status_template(event.new_status)
        context = {
            "store_name": store_name(),
            "order_id": str(event.order_id),
            "status": event.new_status,
        }
        _send_quietly(
            event.phone_number,
            template.render(context),
            order_id=context["order_id"],
            status=event.new_status,
        )
