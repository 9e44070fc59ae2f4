import pytest
from protean.exceptions import ValidationError

from storefront.identity.user.events import UserDeactivated, UserRegistered
from storefront.identity.user.user import User
from storefront.shared.email import EmailAddress
from storefront.shared.phone import validate_mobile


class TestEmailAddress:
    def test_valid(self):
        assert EmailAddress(address="asha@example.com").address == "asha@example.com"

    def test_parse_normalises(self):
        assert EmailAddress.parse("  Asha.Rao@Example.COM ").address == "asha.rao@example.com"

    @pytest.mark.parametrize("value", ["plain", "a@b", "a@@b.com", "a b@c.com", ".a@b.com", "a@b..com"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            EmailAddress(address=value)


class TestPhone:
    def test_strips_whitespace(self):
        assert validate_mobile(" 9876543210 ") == "9876543210"

    @pytest.mark.parametrize("value", [None, "", "12345", "5876543210", "98765432100", "98765-4321"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError) as exc:
            validate_mobile(value)
        assert exc.value.messages == {"phone": ["Please enter a valid 10-digit phone number"]}


class TestUser:
    def test_register_defaults_to_customer(self):
        user = User.register(name="Asha Rao", email=" Asha@Example.com ", phone="9876543210")

        assert user.email.address == "asha@example.com"
        assert user.role == "customer"
        assert not user.is_admin
        assert user.is_active
        assert isinstance(user._events[-1], UserRegistered)

    def test_register_admin(self):
        assert User.register(name="Store Admin", email="admin@example.com", phone="7000000000", role="admin").is_admin

    def test_short_name_rejected(self):
        with pytest.raises(ValidationError) as exc:
            User.register(name="A", email="a@example.com", phone="9876543210")
        assert "name" in exc.value.messages

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            User.register(name="Asha Rao", email="asha@example.com", phone="9876543210", role="owner")

    def test_deactivate(self):
        user = User.register(name="Asha Rao", email="asha@example.com", phone="9876543210")
        user.deactivate()
        user.deactivate()

        assert not user.is_active
        assert len([e for e in user._events if isinstance(e, UserDeactivated)]) == 1
