"""Tests for idempotent role changes."""

import pytest
from fastapi import HTTPException

from app.models.enums import Role
from app.services.role_service import RoleService


class TestGrantRevoke:
    def test_grant_adds_once(self, session, make_user):
        make_user("dana@mail.com")
        roles = RoleService(session)

        roles.grant("dana@mail.com", Role.TRAINER)
        roles.grant("dana@mail.com", Role.TRAINER)
        session.commit()

        user = roles.repository.get_by_email("dana@mail.com")
        assert user.roles == ["Rider", "Trainer"]

    def test_revoke_absent_role_is_noop(self, session, make_user):
        make_user("dana@mail.com")
        user = RoleService(session).revoke("dana@mail.com", Role.ADMIN)
        assert user.roles == ["Rider"]

    def test_revoke(self, session, make_user):
        make_user("dana@mail.com", roles=["Rider", "StableManager"])
        roles = RoleService(session)
        roles.revoke("dana@mail.com", Role.STABLE_MANAGER)
        session.commit()
        assert roles.repository.get_by_email("dana@mail.com").roles == ["Rider"]

    def test_unknown_user(self, session):
        assert RoleService(session).grant("ghost@mail.com", Role.TRAINER) is None

    def test_nothing_committed_until_caller_commits(self, session, make_user):
        make_user("dana@mail.com")
        RoleService(session).grant("dana@mail.com", Role.TRAINER)
        session.rollback()
        assert RoleService(session).repository.get_by_email("dana@mail.com").roles == ["Rider"]


class TestSetRoles:
    def test_replaces_and_deduplicates(self, session, make_user):
        make_user("dana@mail.com")
        user = RoleService(session).set_roles("dana@mail.com", [Role.ADMIN, Role.TRAINER, Role.ADMIN])
        assert user.roles == ["Admin", "Trainer"]

    def test_unknown_user_404(self, session):
        with pytest.raises(HTTPException) as exc:
            RoleService(session).set_roles("ghost@mail.com", [Role.ADMIN])
        assert exc.value.status_code == 404
