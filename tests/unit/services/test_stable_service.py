"""Tests for the stable approval workflow and manager/trainer changes."""

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from app.db.repositories.user import UserRepository
from app.schemas.stable import StableCreate, StableEventUpdate, StableUpdate
from app.services.stable_service import StableService


def _roles(session, email):
    session.expire_all()
    return UserRepository(session).get_by_email(email).roles


@pytest.fixture
def admin(make_user):
    return make_user("admin@ridersos.io", roles=["Admin"])


@pytest.fixture
def owner(make_user):
    return make_user("owner@mail.com")


@pytest.fixture
def stable(session, owner):
    return StableService(session).create(owner, StableCreate(name="Green Valley"))


# ======================================================================
# Registration and approval
# ======================================================================


class TestApproval:
    def test_created_pending_without_role(self, session, stable):
        assert stable.approval_status == "pending"
        assert stable.manager_email == "owner@mail.com"
        assert "StableManager" not in _roles(session, "owner@mail.com")

    def test_approve_grants_manager_role(self, session, stable):
        approved = StableService(session).approve(stable.id)
        assert approved.approval_status == "approved"
        assert "StableManager" in _roles(session, "owner@mail.com")

    def test_approve_twice_conflicts(self, session, stable):
        service = StableService(session)
        service.approve(stable.id)
        with pytest.raises(HTTPException) as exc:
            service.approve(stable.id)
        assert exc.value.status_code == 409

    def test_role_not_duplicated_across_stables(self, session, owner):
        service = StableService(session)
        first = service.create(owner, StableCreate(name="A"))
        second = service.create(owner, StableCreate(name="B"))
        service.approve(first.id)
        service.approve(second.id)
        assert _roles(session, "owner@mail.com").count("StableManager") == 1

    def test_reject_then_approve(self, session, stable):
        service = StableService(session)
        assert service.reject(stable.id).approval_status == "rejected"
        assert service.approve(stable.id).approval_status == "approved"

    def test_cannot_reject_approved(self, session, stable):
        service = StableService(session)
        service.approve(stable.id)
        with pytest.raises(HTTPException) as exc:
            service.reject(stable.id)
        assert exc.value.status_code == 409

    def test_list_filters_by_status(self, session, owner, stable):
        service = StableService(session)
        other = service.create(owner, StableCreate(name="Blue Hills"))
        service.approve(other.id)
        assert [s.name for s in service.list_stables(approval_status="approved")] == ["Blue Hills"]
        assert [s.name for s in service.list_stables(approval_status="pending")] == ["Green Valley"]


# ======================================================================
# Manager change
# ======================================================================


class TestChangeManager:
    def test_old_manager_loses_role_when_no_other_stable(self, session, make_user, stable):
        make_user("newboss@mail.com")
        service = StableService(session)
        service.approve(stable.id)

        changed = service.change_manager(stable.id, "NewBoss@mail.com")

        assert changed.manager_email == "newboss@mail.com"
        assert "StableManager" not in _roles(session, "owner@mail.com")
        assert "StableManager" in _roles(session, "newboss@mail.com")

    def test_old_manager_keeps_role_with_other_stable(self, session, make_user, owner, stable):
        make_user("newboss@mail.com")
        service = StableService(session)
        other = service.create(owner, StableCreate(name="Second Yard"))
        service.approve(stable.id)
        service.approve(other.id)

        service.change_manager(stable.id, "newboss@mail.com")

        assert "StableManager" in _roles(session, "owner@mail.com")
        assert "StableManager" in _roles(session, "newboss@mail.com")

    def test_same_manager_rejected(self, session, stable):
        with pytest.raises(HTTPException) as exc:
            StableService(session).change_manager(stable.id, "owner@mail.com")
        assert exc.value.status_code == 400

    def test_unknown_new_manager(self, session, stable):
        with pytest.raises(HTTPException) as exc:
            StableService(session).change_manager(stable.id, "ghost@mail.com")
        assert exc.value.status_code == 404
        assert StableService(session).get(stable.id).manager_email == "owner@mail.com"


# ======================================================================
# Trainers and permissions
# ======================================================================


class TestTrainers:
    def test_add_trainer_grants_role_once(self, session, make_user, owner, stable):
        make_user("coach@mail.com")
        service = StableService(session)
        service.add_trainer(owner, stable.id, "coach@mail.com")
        updated = service.add_trainer(owner, stable.id, "coach@mail.com")

        assert updated.trainer_emails == ["coach@mail.com"]
        assert _roles(session, "coach@mail.com") == ["Rider", "Trainer"]

    def test_remove_trainer_keeps_role(self, session, make_user, owner, stable):
        make_user("coach@mail.com")
        service = StableService(session)
        service.add_trainer(owner, stable.id, "coach@mail.com")
        updated = service.remove_trainer(owner, stable.id, "coach@mail.com")

        assert updated.trainer_emails == []
        assert "Trainer" in _roles(session, "coach@mail.com")

    def test_stranger_cannot_manage(self, session, make_user, stable):
        stranger = make_user("stranger@mail.com")
        with pytest.raises(HTTPException) as exc:
            StableService(session).add_trainer(stranger, stable.id, "stranger@mail.com")
        assert exc.value.status_code == 403

    def test_admin_can_manage(self, session, make_user, admin, stable):
        make_user("coach@mail.com")
        updated = StableService(session).add_trainer(admin, stable.id, "coach@mail.com")
        assert updated.trainer_emails == ["coach@mail.com"]


def test_missing_stable_404(session):
    with pytest.raises(HTTPException) as exc:
        StableService(session).get(999)
    assert exc.value.status_code == 404


# ======================================================================
# Partial updates
# ======================================================================


class TestUpdate:
    def test_cleared_optional_field(self, session, owner, stable):
        stable = StableService(session).update(owner, stable.id, StableUpdate(city="Haifa"))
        updated = StableService(session).update(owner, stable.id, StableUpdate.model_validate({ "city": None }))

        assert updated.city is None
        assert updated.name == "Green Valley"

    @pytest.mark.parametrize("payload", [{ "name": None }, { "images": None }])
    def test_null_required_field_rejected(self, payload):
        with pytest.raises(ValidationError, match="cannot be null"):
            StableUpdate.model_validate(payload)

    def test_null_event_date_rejected(self):
        with pytest.raises(ValidationError, match="event_date cannot be null"):
            StableEventUpdate.model_validate({ "title": "Clinic", "event_date": None })
