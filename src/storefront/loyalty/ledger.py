"""Loyalty ledger service.

The ledger is append-only. The cached ``Customer.bcoin_balance`` must always
equal the signed sum of the customer's entries; ``reconcile`` reports any
customer for whom it does not.
"""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.customer.customer import Customer
from storefront.domain import logger
from storefront.loyalty.transaction import BcoinTransaction

# Rows read per query when walking a whole ledger or the customer table
PAGE_SIZE = 500


@dataclass(frozen=True)
class BalanceDrift:
    customer_id: str
    cached_balance: int
    ledger_balance: int

    @property
    def difference(self) -> int:
        return self.cached_balance - self.ledger_balance


def append(entry: BcoinTransaction) -> BcoinTransaction:
    """Register ``entry`` for insertion; it commits with the surrounding Unit of Work."""
    current_domain.repository_for(BcoinTransaction).add(entry)
    return entry


def balance_for(customer_id) -> int:
    customer = current_domain.repository_for(Customer).get(customer_id)
    return customer.bcoin_balance or 0


def history(customer_id, page=1, limit=20):
    """One page of a customer's ledger, newest first."""
    return (
        current_domain.repository_for(BcoinTransaction)
        ._dao.query.filter(customer_id=str(customer_id))
        .order_by("-created_at")
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )


def _entries_for(customer_id):
    # Oldest first, so entries appended mid-walk land after the pages already read
    query = (
        current_domain.repository_for(BcoinTransaction)
        ._dao.query.filter(customer_id=str(customer_id))
        .order_by("created_at")
    )
    offset = 0
    while True:
        results = query.offset(offset).limit(PAGE_SIZE).all()
        yield from results.items
        offset += PAGE_SIZE
        if offset >= results.total:
            break


def ledger_balance(customer_id) -> int:
    return sum(entry.signed_delta for entry in _entries_for(customer_id))


def reconcile(customer_id) -> BalanceDrift | None:
    cached = balance_for(customer_id)
    derived = ledger_balance(customer_id)
    if cached == derived:
        return None

    drift = BalanceDrift(customer_id=str(customer_id), cached_balance=cached, ledger_balance=derived)
    logger.warning(
        "Bcoin balance drift detected",
        customer_id=drift.customer_id,
        cached_balance=cached,
        ledger_balance=derived,
    )
    return drift


def reconcile_all() -> list[BalanceDrift]:
    dao = current_domain.repository_for(Customer)._dao
    drifts = []
    offset = 0
    while True:
        results = dao.query.order_by("registered_at").offset(offset).limit(PAGE_SIZE).all()
        for customer in results.items:
            drift = reconcile(customer.id)
            if drift is not None:
                drifts.append(drift)
        offset += PAGE_SIZE
        if offset >= results.total:
            break

    logger.info("Bcoin reconciliation finished", drifted=len(drifts))
    return drifts
