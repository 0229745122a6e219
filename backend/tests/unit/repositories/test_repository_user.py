"""Unit tests for UserRepository."""

import pytest

from storefront.models.user import Role
from storefront.repositories.base import Pagination
from storefront.repositories.user import UserRepository
from tests.factories.user import AdminFactory, SellerFactory, UserFactory


class TestUserRepository:
    """Ensure ``UserRepository`` performs core persistence operations."""

    @pytest.fixture()
    def repo(self):
        return UserRepository()

    def test_get_by_email_is_case_insensitive(self, repo):
        u = UserFactory(email="alice@example.com", name="Alice")

        fetched = repo.get_by_email("  ALICE@example.com ")
        assert fetched is not None
        assert fetched.id == u.id
        assert fetched.name == "Alice"

    def test_exists_by_email(self, repo):
        u = UserFactory(email="bob@example.com")

        assert repo.exists_by_email("bob@example.com")
        assert not repo.exists_by_email("nonexistent@example.com")
        assert not repo.exists_by_email("bob@example.com", exclude_id=u.id)

    def test_update_password(self, repo, session):
        u = UserFactory(email="c@example.com")
        old_hash = u.password_hash

        repo.update_password(u, "newpass123")
        session.commit()

        refreshed = repo.get(u.id)
        assert refreshed.password_hash != old_hash
        assert refreshed.verify_password("newpass123")

    def test_authenticate_valid_and_invalid(self, repo):
        UserFactory(email="auth@example.com", password="strongpass")

        assert repo.authenticate("auth@example.com", "strongpass") is not None
        assert repo.authenticate("auth@example.com", "wrongpass") is None
        assert repo.authenticate("nope@example.com", "strongpass") is None

    def test_paginate_filters_by_role(self, repo):
        UserFactory.create_batch(3)
        SellerFactory()
        AdminFactory()

        page = repo.paginate(Pagination(page=1, limit=10, sort=[]), filters={"role": Role.SELLER})
        assert page.total == 1
        assert page.items[0].role is Role.SELLER

    def test_paginate_sorts_and_slices(self, repo):
        for letter in "cab":
            UserFactory(email=f"{letter}@example.com")

        page = repo.paginate(Pagination(page=1, limit=2, sort=["-email"]))
        assert [u.email for u in page.items] == ["c@example.com", "b@example.com"]
        assert page.total == 3

    def test_assign_updates_rejects_unknown_fields(self, repo):
        u = UserFactory()
        with pytest.raises(ValueError):
            repo.assign_updates(u, {"password_hash": "x"})
