"""Domain events for the Customer aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Customer")
class CustomerRegistered:
    """A customer record was created on their first authenticated request."""

    __version__ = 1

    customer_id: Identifier(required=True)
    external_id: String(required=True)
    email: String(required=True)
    name: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of="Customer")
class ProfileUpdated:
    __version__ = 1

    customer_id: Identifier(required=True)
    name: String()
    phone: String()


@storefront.event(part_of="Customer")
class AddressAdded:
    __version__ = 1

    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)
    label: String()
    city: String()
    is_default: Boolean(default=False)


@storefront.event(part_of="Customer")
class AddressUpdated:
    __version__ = 1

    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)
    is_default: Boolean(default=False)


@storefront.event(part_of="Customer")
class AddressRemoved:
    __version__ = 1

    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)
