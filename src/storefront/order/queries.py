"""Order read paths with owner/admin visibility."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.customer.authorization import is_admin, require_admin
from storefront.order.order import Order, parse_status


def _page(criteria, page, limit):
    query = current_domain.repository_for(Order)._dao.query
    if criteria:
        query = query.filter(**criteria)
    return (
        query.order_by("-created_at")
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )


def orders_for_customer(customer_id, status=None, page=1, limit=10):
    """A customer's own orders, newest first."""
    criteria = {"customer_id": str(customer_id)}
    if status:
        criteria["status"] = parse_status(status).value
    return _page(criteria, page, limit)


def all_orders(caller, status=None, customer_id=None, page=1, limit=20):
    require_admin(caller)
    criteria = {}
    if status:
        criteria["status"] = parse_status(status).value
    if customer_id:
        criteria["customer_id"] = str(customer_id)
    return _page(criteria, page, limit)


def order_visible_to(caller, order_id):
    """The order, if ``caller`` placed it or is an admin.

    Someone else's order is reported as missing rather than forbidden.
    """
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.customer_id) != str(caller.id) and not is_admin(caller):
        raise ObjectNotFoundError(f"Order with id {order_id} does not exist")
    return order
