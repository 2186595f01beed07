import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from app.api.message import get_conversations, get_thread, send_message
from app.models.message import Message
from app.models.notification import Notification
from app.models.skill_request import SkillRequest
from app.schemas.message import MessageCreate


def _send(db, sender, receiver, text, as_principal):
    return send_message(
        MessageCreate(receiverId=receiver.id, messageText=text),
        current_user=as_principal(sender),
        db=db,
    )


def test_send_message_stores_row_and_notifies_receiver(db_session, make_user, as_principal):
    ada = make_user(name="Ada")
    bob = make_user(name="Bob")

    result = _send(db_session, ada, bob, "Hi Bob", as_principal)

    assert result["success"] is True
    assert result["message"]["messageText"] == "Hi Bob"
    assert result["message"]["isRead"] is False

    notification = db_session.query(Notification).filter(Notification.user_id == bob.id).one()
    assert notification.type == "message"
    assert notification.link == f"/messages/{ada.id}"


def test_cannot_message_self(db_session, make_user, as_principal):
    ada = make_user()
    with pytest.raises(HTTPException) as exc:
        _send(db_session, ada, ada, "Hi me", as_principal)
    assert exc.value.status_code == 400
    assert db_session.query(Message).count() == 0


def test_message_to_missing_user_is_404(db_session, make_user, as_principal):
    ada = make_user()
    with pytest.raises(HTTPException) as exc:
        send_message(
            MessageCreate(receiverId=999, messageText="Hello?"),
            current_user=as_principal(ada),
            db=db_session,
        )
    assert exc.value.status_code == 404


def test_linked_request_must_involve_both_users(db_session, make_user, make_skill, as_principal):
    ada, bob, cat = make_user(), make_user(), make_user()
    skill = make_skill(cat)
    request = SkillRequest(requester_id=bob.id, provider_id=cat.id, skill_id=skill.id)
    db_session.add(request)
    db_session.commit()

    with pytest.raises(HTTPException) as exc:
        send_message(
            MessageCreate(receiverId=bob.id, messageText="About that swap", skillRequestId=request.id),
            current_user=as_principal(ada),
            db=db_session,
        )
    assert exc.value.status_code == 404


def test_thread_is_ascending_and_marks_incoming_read(db_session, make_user, as_principal):
    ada = make_user()
    bob = make_user()
    _send(db_session, bob, ada, "first", as_principal)
    _send(db_session, ada, bob, "second", as_principal)
    _send(db_session, bob, ada, "third", as_principal)

    payload = get_thread(bob.id, current_user=as_principal(ada), db=db_session)

    assert [m["messageText"] for m in payload["messages"]] == ["first", "second", "third"]
    # Flags reflect the state before this fetch
    assert [m["isRead"] for m in payload["messages"]] == [False, False, False]

    db_session.expire_all()
    incoming = db_session.query(Message).filter(Message.receiver_id == ada.id).all()
    assert all(m.is_read for m in incoming)
    outgoing = db_session.query(Message).filter(Message.receiver_id == bob.id).one()
    assert outgoing.is_read is False


def test_thread_with_missing_user_is_404(db_session, make_user, as_principal):
    ada = make_user()
    with pytest.raises(HTTPException) as exc:
        get_thread(999, current_user=as_principal(ada), db=db_session)
    assert exc.value.status_code == 404


def test_conversations_show_latest_message_and_unread_count(db_session, make_user, as_principal):
    ada = make_user(name="Ada")
    bob = make_user(name="Bob")
    cat = make_user(name="Cat")
    _send(db_session, bob, ada, "hey", as_principal)
    _send(db_session, bob, ada, "you there?", as_principal)
    _send(db_session, ada, cat, "hello cat", as_principal)

    result = get_conversations(current_user=as_principal(ada), db=db_session)
    conversations = result["conversations"]

    assert [c["userId"] for c in conversations] == [cat.id, bob.id]
    by_user = {c["userId"]: c for c in conversations}
    assert by_user[bob.id]["lastMessage"] == "you there?"
    assert by_user[bob.id]["unreadCount"] == 2
    assert by_user[cat.id]["unreadCount"] == 0
    assert by_user[cat.id]["userName"] == "Cat"


def test_message_text_is_required():
    with pytest.raises(ValidationError):
        MessageCreate(receiverId=1, messageText="   ")
