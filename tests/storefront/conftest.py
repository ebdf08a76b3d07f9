import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed, sms, monkeypatch):
    monkeypatch.delenv("STORE_OWNER_PHONE", raising=False)
    with storefront_bed.domain_context():
        yield


@pytest.fixture()
def make_product():
    """Persist an active product; keyword overrides replace the defaults."""
    from protean import current_domain
    from storefront.product.product import Product

    def _make(**overrides):
        fields = {
            "name": "Basmati Rice",
            "description": "Aged long-grain rice",
            "original_price": 70.0,
            "discounted_price": 65.0,
            "category": "Grains",
            "stock": 10,
            "is_open": False,
            "unit": "piece",
        }
        fields.update(overrides)
        product = Product.add(**fields)
        current_domain.repository_for(Product).add(product)
        return current_domain.repository_for(Product).get(product.id)

    return _make


@pytest.fixture()
def make_customer():
    """Persist a customer with an optional starting bcoin balance and role."""
    from protean import current_domain
    from storefront.customer.customer import Customer

    counter = {"n": 0}

    def _make(bcoin_balance=0, role="user", name="Asha Rao"):
        counter["n"] += 1
        customer = Customer.register(
            external_id=f"user_{counter['n']:03d}",
            email=f"shopper{counter['n']}@example.com",
            name=name,
            role=role,
        )
        customer.bcoin_balance = bcoin_balance
        current_domain.repository_for(Customer).add(customer)
        return current_domain.repository_for(Customer).get(customer.id)

    return _make


@pytest.fixture()
def seed_bcoins():
    """Give a customer an opening balance backed by an earned ledger entry."""
    from uuid import uuid4

    from protean import current_domain
    from storefront.customer.customer import Customer
    from storefront.loyalty import ledger
    from storefront.loyalty.transaction import BCOINS_EARN_DIVISOR, BcoinTransaction

    def _seed(customer, bcoins):
        customer = current_domain.repository_for(Customer).get(customer.id)
        customer.credit_bcoins(bcoins)
        ledger.append(
            BcoinTransaction.earned(
                customer_id=str(customer.id),
                order_id=str(uuid4()),
                amount_spent=float(bcoins * BCOINS_EARN_DIVISOR),
                bcoins=bcoins,
            )
        )
        current_domain.repository_for(Customer).add(customer)
        return current_domain.repository_for(Customer).get(customer.id)

    return _seed
