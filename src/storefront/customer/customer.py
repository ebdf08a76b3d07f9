"""Customer aggregate root with the Address entity.

A Customer mirrors an identity-provider account. It also carries the cached
bcoin balance, which every ledger entry must move in lockstep.
"""

from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Integer, String

from storefront.domain import storefront
from storefront.errors import InsufficientLoyaltyBalance

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


class AddressLabel(Enum):
    HOME = "home"
    WORK = "work"
    OTHER = "other"


@storefront.entity(part_of="Customer")
class Address:
    """A delivery location in the customer's address book."""

    label: String(choices=AddressLabel, default=AddressLabel.HOME.value)
    address_line: String(required=True, max_length=500)
    city: String(required=True, max_length=100)
    postal_code: String(required=True, max_length=20)
    is_default: Boolean(default=False)


@storefront.aggregate
class Customer:
    """A shopper or store admin, keyed by the identity provider's user id."""

    external_id: String(required=True, max_length=255, unique=True)
    email: String(required=True, max_length=254)
    name: String(required=True, max_length=255)
    phone: String(max_length=20)
    role: String(choices=Role, default=Role.USER.value)
    addresses: HasMany(Address)
    bcoin_balance: Integer(default=0)
    is_active: Boolean(default=True)
    registered_at: DateTime()

    @invariant.post
    def bcoin_balance_cannot_be_negative(self):
        if self.bcoin_balance is not None and self.bcoin_balance < 0:
            raise ValidationError({"bcoin_balance": ["Bcoin balance cannot be negative"]})

    @invariant.post
    def exactly_one_default_address_when_addresses_exist(self):
        if not self.addresses:
            return
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) != 1:
            raise ValidationError({"addresses": ["Exactly one address must be marked as default"]})

    @property
    def is_admin(self):
        return self.role == Role.ADMIN.value

    @classmethod
    def register(cls, external_id, email, name, role=Role.USER.value, phone=None):
        from storefront.customer.events import CustomerRegistered

        now = datetime.now()
        customer = cls(
            external_id=external_id,
            email=email.strip().lower(),
            name=name.strip(),
            phone=phone,
            role=role,
            registered_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=str(customer.id),
                external_id=external_id,
                email=customer.email,
                name=customer.name,
                role=role,
                registered_at=now,
            )
        )
        return customer

    def update_profile(self, name=_UNSET, phone=_UNSET):
        from storefront.customer.events import ProfileUpdated

        if name is not _UNSET and name:
            self.name = name.strip()
        if phone is not _UNSET:
            self.phone = phone or None

        self.raise_(
            ProfileUpdated(
                customer_id=str(self.id),
                name=self.name,
                phone=self.phone,
            )
        )

    # -------------------------------------------------------------------
    # Address book
    # -------------------------------------------------------------------
    def add_address(self, address_line, city, postal_code, label=AddressLabel.HOME.value, is_default=False):
        from storefront.customer.events import AddressAdded

        # First address is always default
        if not self.addresses:
            is_default = True

        with atomic_change(self):
            if is_default:
                for addr in self.addresses:
                    if addr.is_default:
                        addr.is_default = False

            address = Address(
                label=label,
                address_line=address_line,
                city=city,
                postal_code=postal_code,
                is_default=is_default,
            )
            self.add_addresses(address)

        self.raise_(
            AddressAdded(
                customer_id=str(self.id),
                address_id=str(address.id),
                label=label,
                city=city,
                is_default=is_default,
            )
        )
        return address

    def update_address(self, address_id, is_default=None, **changes):
        from storefront.customer.events import AddressUpdated

        address = self._find_address(address_id)

        with atomic_change(self):
            for field, value in changes.items():
                if value is not None:
                    setattr(address, field, value)

            if is_default:
                for addr in self.addresses:
                    addr.is_default = addr.id == address.id

        self.raise_(
            AddressUpdated(
                customer_id=str(self.id),
                address_id=str(address.id),
                is_default=address.is_default,
            )
        )

    def remove_address(self, address_id):
        from storefront.customer.events import AddressRemoved

        address = self._find_address(address_id)
        was_default = address.is_default

        with atomic_change(self):
            self.remove_addresses(address)

            # The first remaining address inherits the default flag
            if was_default and self.addresses:
                self.addresses[0].is_default = True

        self.raise_(
            AddressRemoved(
                customer_id=str(self.id),
                address_id=str(address_id),
            )
        )

    def _find_address(self, address_id):
        address = next((a for a in self.addresses if str(a.id) == str(address_id)), None)
        if address is None:
            raise ValidationError({"addresses": [f"Address {address_id} not found"]})
        return address

    # -------------------------------------------------------------------
    # Cached bcoin balance
    # -------------------------------------------------------------------
    def redeem_bcoins(self, amount):
        """Spend ``amount`` bcoins; the check and the decrement happen on the same copy."""
        if amount <= 0:
            raise ValidationError({"bcoins_used": ["Bcoins to redeem must be positive"]})
        if self.bcoin_balance < amount:
            raise InsufficientLoyaltyBalance(balance=self.bcoin_balance, requested=amount)
        self.bcoin_balance -= amount

    def credit_bcoins(self, amount):
        if amount <= 0:
            raise ValidationError({"bcoins": ["Bcoins to credit must be positive"]})
        self.bcoin_balance += amount
