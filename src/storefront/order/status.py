"""Admin-driven order status changes: command, handler and guarded entry point."""

from protean import handle
from protean.exceptions import ExpectedVersionError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.customer.authorization import require_admin
from storefront.domain import logger, storefront
from storefront.errors import ConcurrencyConflict
from storefront.order.order import Order


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.transition_to(command.status)
        repo.add(order)

        logger.info("Order status updated", order_id=str(order.id), status=order.status)


def update_order_status(caller, order_id, status):
    """Move an order to ``status`` on behalf of ``caller``, who must be an admin."""
    require_admin(caller)
    try:
        current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)
    except ExpectedVersionError:
        logger.warning("Concurrent status update rejected", order_id=str(order_id), status=status)
        raise ConcurrencyConflict() from None
