"""
Tests for shared models.
"""

import pytest
from pydantic import ValidationError

from shared.models import AuthContext, AuthorizedPrincipal, Principal, Role


class TestRole:
    def test_admin_satisfies_every_role(self):
        assert Role.ADMIN.satisfies(Role.ADMIN)
        assert Role.ADMIN.satisfies(Role.USER)

    def test_user_does_not_satisfy_admin(self):
        assert Role.USER.satisfies(Role.USER)
        assert not Role.USER.satisfies(Role.ADMIN)

    def test_unknown_value_is_rejected(self):
        with pytest.raises(ValueError):
            Role("superuser")


class TestPrincipal:
    def test_email_defaults_to_empty(self):
        assert Principal(id="user-123").email == ""

    def test_principal_is_immutable(self):
        principal = Principal(id="user-123", email="test@example.com")
        with pytest.raises(ValidationError):
            principal.id = "other"

    def test_authorized_principal_requires_role(self):
        with pytest.raises(ValidationError):
            AuthorizedPrincipal(id="user-123")


class TestAuthContext:
    def test_exposes_user_id(self):
        context = AuthContext(principal=Principal(id="user-123"), token="tok")
        assert context.user_id == "user-123"

    def test_role_is_none_before_role_gate(self):
        context = AuthContext(principal=Principal(id="user-123"), token="tok")
        assert context.role is None

    def test_role_after_role_gate(self):
        principal = AuthorizedPrincipal(id="user-123", role=Role.ADMIN)
        context = AuthContext(principal=principal, token="tok")
        assert context.role is Role.ADMIN
