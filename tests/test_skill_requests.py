import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from app.api.skill_request import create_request, get_my_requests, update_request_status
from app.models.notification import Notification
from app.models.skill_request import SkillRequest
from app.schemas.skill_request import SkillRequestCreate, SkillRequestStatusUpdate
from app.services.skill_request_service import can_transition


@pytest.fixture
def swap(db_session, make_user, make_skill):
    requester = make_user(name="Ada")
    provider = make_user(name="Bob")
    skill = make_skill(provider, "Photography")
    return requester, provider, skill


def _open_request(db, requester, provider, skill, as_principal, message="Teach me?"):
    return create_request(
        SkillRequestCreate(providerId=provider.id, skillId=skill.id, message=message),
        current_user=as_principal(requester),
        db=db,
    )["request"]


def _patch(db, request_id, actor, status, as_principal):
    return update_request_status(
        request_id,
        SkillRequestStatusUpdate(status=status),
        current_user=as_principal(actor),
        db=db,
    )


def test_create_request_is_pending_and_notifies_provider(db_session, swap, as_principal):
    requester, provider, skill = swap

    request = _open_request(db_session, requester, provider, skill, as_principal)

    assert request["status"] == "pending"
    assert request["skill"] == {"id": skill.id, "name": "Photography", "category": "Music"}
    assert request["requester"]["id"] == requester.id
    notification = db_session.query(Notification).filter(Notification.user_id == provider.id).one()
    assert notification.type == "skill_request"
    assert "Photography" in notification.message


def test_cannot_request_from_self(db_session, swap, as_principal):
    _, provider, skill = swap
    with pytest.raises(HTTPException) as exc:
        _open_request(db_session, provider, provider, skill, as_principal)
    assert exc.value.status_code == 400


def test_skill_must_belong_to_provider(db_session, swap, make_user, make_skill, as_principal):
    requester, provider, _ = swap
    stranger_skill = make_skill(make_user(), "Knitting")

    with pytest.raises(HTTPException) as exc:
        _open_request(db_session, requester, provider, stranger_skill, as_principal)

    assert exc.value.status_code == 404
    assert exc.value.detail == "Skill not found"
    assert db_session.query(SkillRequest).count() == 0


def test_missing_provider_is_404(db_session, swap, as_principal):
    requester, _, skill = swap
    with pytest.raises(HTTPException) as exc:
        create_request(
            SkillRequestCreate(providerId=999, skillId=skill.id),
            current_user=as_principal(requester),
            db=db_session,
        )
    assert exc.value.status_code == 404


def test_provider_accepts_then_completes(db_session, swap, as_principal):
    requester, provider, skill = swap
    request = _open_request(db_session, requester, provider, skill, as_principal)

    accepted = _patch(db_session, request["id"], provider, "accepted", as_principal)
    assert accepted["request"]["status"] == "accepted"

    completed = _patch(db_session, request["id"], provider, "completed", as_principal)
    assert completed["request"]["status"] == "completed"

    updates = db_session.query(Notification).filter(
        Notification.user_id == requester.id,
        Notification.type == "request_update",
    ).count()
    assert updates == 2


def test_requester_cannot_update_status(db_session, swap, as_principal):
    requester, provider, skill = swap
    request = _open_request(db_session, requester, provider, skill, as_principal)

    with pytest.raises(HTTPException) as exc:
        _patch(db_session, request["id"], requester, "accepted", as_principal)

    assert exc.value.status_code == 403
    assert db_session.get(SkillRequest, request["id"]).status == "pending"


@pytest.mark.parametrize(
    "path,target",
    [
        ((), "completed"),
        ((), "cancelled"),
        (("rejected",), "accepted"),
        (("accepted", "completed"), "cancelled"),
        (("accepted",), "rejected"),
    ],
)
def test_unreachable_transition_conflicts(db_session, swap, as_principal, path, target):
    requester, provider, skill = swap
    request = _open_request(db_session, requester, provider, skill, as_principal)
    for step in path:
        _patch(db_session, request["id"], provider, step, as_principal)

    with pytest.raises(HTTPException) as exc:
        _patch(db_session, request["id"], provider, target, as_principal)

    assert exc.value.status_code == 409


def test_missing_request_is_404(db_session, swap, as_principal):
    _, provider, _ = swap
    with pytest.raises(HTTPException) as exc:
        _patch(db_session, 999, provider, "accepted", as_principal)
    assert exc.value.status_code == 404


@pytest.mark.parametrize("status", ["pending", "done", ""])
def test_unknown_status_is_invalid(status):
    with pytest.raises(ValidationError) as exc:
        SkillRequestStatusUpdate(status=status)
    assert "Invalid status" in str(exc.value)


def test_status_is_case_insensitive():
    assert SkillRequestStatusUpdate(status=" Accepted ").status == "accepted"


def test_listing_splits_received_and_made(db_session, swap, make_skill, as_principal):
    requester, provider, skill = swap
    received = _open_request(db_session, requester, provider, skill, as_principal)
    own_skill = make_skill(requester, "Baking")
    made = _open_request(db_session, provider, requester, own_skill, as_principal)

    result = get_my_requests(current_user=as_principal(provider), db=db_session)

    assert [r["id"] for r in result["requests"]] == [received["id"]]
    assert [r["id"] for r in result["requestsMade"]] == [made["id"]]


def test_transition_table():
    assert can_transition("pending", "accepted")
    assert can_transition("pending", "rejected")
    assert can_transition("accepted", "completed")
    assert can_transition("accepted", "cancelled")
    assert not can_transition("pending", "completed")
    assert not can_transition("completed", "cancelled")
    assert not can_transition("unknown", "accepted")


@pytest.mark.parametrize("final", ["rejected", "cancelled", "completed"])
def test_closed_request_cannot_move(db_session, swap, as_principal, final):
    requester, provider, skill = swap
    request = _open_request(db_session, requester, provider, skill, as_principal)
    path = ("rejected",) if final == "rejected" else ("accepted", final)
    for step in path:
        _patch(db_session, request["id"], provider, step, as_principal)

    with pytest.raises(HTTPException) as exc:
        _patch(db_session, request["id"], provider, "accepted", as_principal)

    assert exc.value.status_code == 409
    assert exc.value.detail == f"Request is already {final}"
