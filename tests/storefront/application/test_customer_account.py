import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.customer.addresses import AddAddress, RemoveAddress, UpdateAddress
from storefront.customer.authorization import is_admin, require_admin
from storefront.customer.customer import Customer
from storefront.customer.profile import UpdateProfile
from storefront.errors import NotAuthorized


def _reload(customer):
    return current_domain.repository_for(Customer).get(customer.id)


def _add(customer, **overrides):
    fields = {
        "customer_id": str(customer.id),
        "address_line": "5 Temple Rd",
        "city": "Mysuru",
        "postal_code": "570001",
    }
    fields.update(overrides)
    return current_domain.process(AddAddress(**fields), asynchronous=False)


class TestProfile:
    def test_update_name_and_phone(self, make_customer):
        customer = make_customer()
        current_domain.process(
            UpdateProfile(customer_id=str(customer.id), name="Asha R", phone="9988776655"),
            asynchronous=False,
        )

        updated = _reload(customer)
        assert updated.name == "Asha R"
        assert updated.phone == "9988776655"


class TestAddresses:
    def test_add_returns_id_and_first_is_default(self, make_customer):
        customer = make_customer()
        address_id = _add(customer, label="home")

        stored = _reload(customer)
        assert str(stored.addresses[0].id) == address_id
        assert stored.addresses[0].is_default is True

    def test_update_moves_default(self, make_customer):
        customer = make_customer()
        _add(customer)
        second = _add(customer, address_line="8 Palace Rd", label="work")

        current_domain.process(
            UpdateAddress(customer_id=str(customer.id), address_id=second, is_default=True),
            asynchronous=False,
        )

        defaults = [a for a in _reload(customer).addresses if a.is_default]
        assert [str(a.id) for a in defaults] == [second]

    def test_remove_default_promotes_remaining(self, make_customer):
        customer = make_customer()
        first = _add(customer)
        second = _add(customer, address_line="8 Palace Rd")

        current_domain.process(RemoveAddress(customer_id=str(customer.id), address_id=first), asynchronous=False)

        stored = _reload(customer)
        assert [str(a.id) for a in stored.addresses] == [second]
        assert stored.addresses[0].is_default is True

    def test_remove_unknown_address(self, make_customer):
        customer = make_customer()
        with pytest.raises(ValidationError):
            current_domain.process(
                RemoveAddress(customer_id=str(customer.id), address_id="missing"),
                asynchronous=False,
            )


class TestAuthorization:
    def test_admin(self, make_customer):
        admin = make_customer(role="admin")
        assert is_admin(admin)
        assert require_admin(admin) is admin

    def test_shopper(self, make_customer):
        shopper = make_customer()
        assert not is_admin(shopper)
        with pytest.raises(NotAuthorized):
            require_admin(shopper)

    def test_nobody(self):
        assert not is_admin(None)

    def test_inactive_admin_is_not_admin(self, make_customer):
        admin = make_customer(role="admin")
        admin.is_active = False
        assert not is_admin(admin)
