"""Admin-recorded payment outcomes.

Clients never report their own payment result. An order stays ``pending``
until an admin records that the money arrived (``paid``) or did not
(``failed``).
"""

from protean import handle
from protean.exceptions import ExpectedVersionError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.customer.authorization import require_admin
from storefront.domain import logger, storefront
from storefront.errors import ConcurrencyConflict
from storefront.order.order import Order


@storefront.command(part_of="Order")
class RecordPayment:
    order_id = Identifier(required=True)
    payment_status = String(required=True, max_length=10)


@storefront.command_handler(part_of=Order)
class RecordPaymentHandler:
    @handle(RecordPayment)
    def record_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.record_payment(command.payment_status)
        repo.add(order)

        logger.info("Payment recorded", order_id=str(order.id), payment_status=order.payment_status)


def record_payment(caller, order_id, payment_status):
    require_admin(caller)
    try:
        current_domain.process(
            RecordPayment(order_id=order_id, payment_status=payment_status),
            asynchronous=False,
        )
    except ExpectedVersionError:
        raise ConcurrencyConflict() from None
