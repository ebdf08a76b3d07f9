"""Customer registration: command, handler and the lazy lookup used by the API."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.customer.customer import Customer, Role
from storefront.domain import logger, storefront


@storefront.command(part_of="Customer")
class RegisterCustomer:
    """Create the local record for an identity-provider account."""

    external_id: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    name: String(required=True, max_length=255)
    role: String(max_length=10)


@storefront.command_handler(part_of=Customer)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        customer = Customer.register(
            external_id=command.external_id,
            email=command.email,
            name=command.name,
            role=command.role or Role.USER.value,
        )
        current_domain.repository_for(Customer).add(customer)
        return str(customer.id)


def find_customer_by_external_id(external_id):
    results = current_domain.repository_for(Customer)._dao.query.filter(external_id=external_id).all()
    return results.first if results.items else None


def ensure_customer(external_id, email, name=None, role=None):
    """Return the customer for ``external_id``, creating it on first sight.

    The role claim only seeds a new record. Once the customer exists, the
    stored role wins and later claims are ignored.
    """
    customer = find_customer_by_external_id(external_id)
    if customer is not None:
        return customer

    seeded_role = role if role in (Role.USER.value, Role.ADMIN.value) else Role.USER.value
    customer_id = current_domain.process(
        RegisterCustomer(
            external_id=external_id,
            email=email,
            name=name or email.split("@")[0],
            role=seeded_role,
        ),
        asynchronous=False,
    )
    logger.info("Customer registered", customer_id=customer_id, external_id=external_id, role=seeded_role)
    return current_domain.repository_for(Customer).get(customer_id)
