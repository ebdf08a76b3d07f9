"""Customer address book: commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.customer.customer import Customer
from storefront.domain import storefront


@storefront.command(part_of="Customer")
class AddAddress:
    """Add a delivery address to a customer's address book."""

    customer_id: Identifier(required=True)
    label: String(max_length=10)
    address_line: String(required=True, max_length=500)
    city: String(required=True, max_length=100)
    postal_code: String(required=True, max_length=20)
    is_default: Boolean(default=False)


@storefront.command(part_of="Customer")
class UpdateAddress:
    """Modify fields of an existing address, optionally making it the default."""

    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)
    label: String(max_length=10)
    address_line: String(max_length=500)
    city: String(max_length=100)
    postal_code: String(max_length=20)
    is_default: Boolean(default=False)


@storefront.command(part_of="Customer")
class RemoveAddress:
    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)


@storefront.command_handler(part_of=Customer)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)

        kwargs = {
            "address_line": command.address_line,
            "city": command.city,
            "postal_code": command.postal_code,
            "is_default": bool(command.is_default),
        }
        if command.label:
            kwargs["label"] = command.label

        address = customer.add_address(**kwargs)
        repo.add(customer)
        return str(address.id)

    @handle(UpdateAddress)
    def update_address(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.update_address(
            command.address_id,
            is_default=command.is_default,
            label=command.label,
            address_line=command.address_line,
            city=command.city,
            postal_code=command.postal_code,
        )
        repo.add(customer)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.remove_address(command.address_id)
        repo.add(customer)
