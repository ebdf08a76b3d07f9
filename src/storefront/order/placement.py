"""Order placement: command, handler and the retrying entry point.

A single ``PlaceOrder`` reserves stock, spends and earns bcoins, writes the
order and its ledger entries. Every change is registered with the handler's
Unit of Work, so either all of it commits or none of it does.
"""

import json

from protean import handle
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.config import order_commit_attempts
from storefront.customer.customer import Customer
from storefront.domain import logger, storefront
from storefront.errors import ConcurrencyConflict, PersistenceError
from storefront.loyalty import ledger
from storefront.loyalty.transaction import BcoinTransaction
from storefront.order.order import Order, PaymentMode
from storefront.product.management import find_active_product
from storefront.product.product import Product


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    delivery_address = Text(required=True)
    phone_number = String(required=True, max_length=20)
    payment_mode = String(max_length=20, default=PaymentMode.CASH_ON_DELIVERY.value)
    bcoins_used = Integer(default=0, min_value=0)


def _parse_quantity(raw):
    try:
        quantity = float(raw)
    except (TypeError, ValueError):
        raise ValidationError({"items": [f"Invalid quantity: {raw}"]}) from None
    if quantity <= 0:
        raise ValidationError({"items": ["Quantity must be greater than zero"]})
    return quantity


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        try:
            cart = json.loads(command.items)
        except ValueError:
            raise ValidationError({"items": ["Items must be a JSON list"]}) from None
        if not cart:
            raise ValidationError({"items": ["Order items are required"]})
        if not isinstance(cart, list) or not all(isinstance(entry, dict) for entry in cart):
            raise ValidationError({"items": ["Items must be a list of product_id and quantity pairs"]})

        product_repo = current_domain.repository_for(Product)
        customer_repo = current_domain.repository_for(Customer)

        # A product listed twice is loaded once so both lines draw on the same stock
        products = {}
        lines = []
        for entry in cart:
            product_id = str(entry.get("product_id") or "")
            quantity = _parse_quantity(entry.get("quantity"))

            product = products.get(product_id)
            if product is None:
                product = find_active_product(product_id)
                products[product_id] = product

            if not product.is_open and not quantity.is_integer():
                raise ValidationError({"items": [f"{product.name} is sold in whole units"]})

            product.decrement_stock(quantity)
            lines.append(
                {
                    "product_id": str(product.id),
                    "product_name": product.name,
                    "quantity": quantity,
                    "unit_price": product.discounted_price,
                    "unit": product.unit,
                }
            )

        customer = customer_repo.get(command.customer_id)
        bcoins_used = command.bcoins_used or 0
        if bcoins_used > 0:
            customer.redeem_bcoins(bcoins_used)

        order = Order.place(
            customer_id=str(customer.id),
            lines=lines,
            delivery_address=command.delivery_address,
            phone_number=command.phone_number,
            payment_mode=command.payment_mode,
            bcoins_used=bcoins_used,
        )

        if order.bcoins_earned > 0:
            customer.credit_bcoins(order.bcoins_earned)
            ledger.append(
                BcoinTransaction.earned(
                    customer_id=str(customer.id),
                    order_id=str(order.id),
                    amount_spent=order.total_amount + bcoins_used,
                    bcoins=order.bcoins_earned,
                )
            )

        if bcoins_used > 0:
            ledger.append(
                BcoinTransaction.redeemed(
                    customer_id=str(customer.id),
                    order_id=str(order.id),
                    bcoins=bcoins_used,
                )
            )

        for product in products.values():
            if not product.is_open:
                product_repo.add(product)
        customer_repo.add(customer)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(customer.id),
            total_amount=order.total_amount,
            bcoins_used=bcoins_used,
            bcoins_earned=order.bcoins_earned,
        )
        return str(order.id)


def place_order(customer_id, items, delivery_address, phone_number, payment_mode=None, bcoins_used=0):
    """Process ``PlaceOrder``, retrying when a concurrent commit invalidated the read.

    Each attempt re-reads stock and balance, so a retry that finds the stock
    gone fails with ``InsufficientStock`` rather than overselling.

    Returns:
        The id of the placed order.
    """
    attempts = order_commit_attempts()
    command = PlaceOrder(
        customer_id=customer_id,
        items=json.dumps(items),
        delivery_address=delivery_address,
        phone_number=phone_number,
        payment_mode=payment_mode or PaymentMode.CASH_ON_DELIVERY.value,
        bcoins_used=bcoins_used or 0,
    )

    for attempt in range(1, attempts + 1):
        try:
            return current_domain.process(command, asynchronous=False)
        except ExpectedVersionError:
            logger.warning("Order commit conflicted, retrying", customer_id=str(customer_id), attempt=attempt)
        except (ValidationError, ObjectNotFoundError):
            raise
        except Exception as exc:
            logger.exception("Order commit failed", customer_id=str(customer_id), error=str(exc))
            raise PersistenceError("Error creating order") from exc

    raise ConcurrencyConflict()
