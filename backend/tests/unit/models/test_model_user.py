"""Unit tests for the ``User`` model and ``Role`` enum."""

import pytest

from storefront.models.user import Role, User
from tests.factories.user import UserFactory


class TestUserModel:
    def test_password_is_hashed_on_write(self, session):
        user = User(email="hash@example.com", name="Hash", password="s3cret")
        session.add(user)
        session.flush()

        assert user.password_hash != "s3cret"
        assert user.verify_password("s3cret")
        assert not user.verify_password("wrong")

    def test_password_is_write_only(self):
        user = User(email="wo@example.com", name="Wo", password="x")
        with pytest.raises(AttributeError):
            _ = user.password

    def test_empty_password_rejected(self):
        with pytest.raises(ValueError):
            User(email="empty@example.com", name="Empty", password="")

    def test_email_is_normalized(self):
        user = User(email="  Mixed.Case@Example.COM ", name="M", password="x")
        assert user.email == "mixed.case@example.com"

    def test_malformed_email_rejected(self):
        with pytest.raises(ValueError):
            User(email="not-an-email", name="N", password="x")

    def test_role_defaults_to_user(self, session):
        user = User(email="default@example.com", name="D", password="x")
        session.add(user)
        session.flush()
        assert user.role is Role.USER

    def test_role_coerced_from_string(self):
        user = UserFactory.build(role="ADMIN")
        assert user.role is Role.ADMIN

    def test_unknown_role_rejected(self):
        with pytest.raises(ValueError):
            UserFactory.build(role="superuser")

    def test_repr_has_no_pii(self):
        user = UserFactory()
        assert user.email not in repr(user)
        assert repr(user).startswith("<User id=")
