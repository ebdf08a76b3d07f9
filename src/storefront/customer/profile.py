"""Customer profile management: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.customer.customer import Customer
from storefront.domain import storefront


@storefront.command(part_of="Customer")
class UpdateProfile:
    customer_id: Identifier(required=True)
    name: String(max_length=255)
    phone: String(max_length=20)


@storefront.command_handler(part_of=Customer)
class ManageProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.update_profile(name=command.name, phone=command.phone)
        repo.add(customer)
