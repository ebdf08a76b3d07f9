"""Admin view over every registered customer."""

from protean.utils.globals import current_domain
from protean.utils.query import Q

from storefront.customer.authorization import require_admin
from storefront.customer.customer import Customer


def list_customers(caller, search=None, page=1, limit=20):
    """Customers, newest first, optionally narrowed by a name or email search."""
    require_admin(caller)
    query = current_domain.repository_for(Customer)._dao.query
    if search:
        query = query.filter(Q(name__icontains=search) | Q(email__icontains=search))
    return query.order_by("-registered_at").offset((page - 1) * limit).limit(limit).all()
