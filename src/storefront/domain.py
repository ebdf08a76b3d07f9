"""Storefront bounded context: catalogue, customers, loyalty ledger and orders.

Everything a single order placement touches lives in this one domain so that
stock, bcoin balance, order and ledger writes share one Unit of Work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
