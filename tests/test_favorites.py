import pytest
from fastapi import HTTPException

from app.api.favorite import add_favorite, get_my_favorites, get_users_who_favorited_me, remove_favorite
from app.api.users import get_user_profile
from app.models.favorite import Favorite
from app.models.notification import Notification
from app.schemas.favorite import FavoriteCreate


def test_favoriting_twice_keeps_one_row_and_notifies_twice(db_session, make_user, as_principal):
    ada = make_user(name="Ada")
    bob = make_user(name="Bob")

    first = add_favorite(FavoriteCreate(userId=bob.id), current_user=as_principal(ada), db=db_session)
    second = add_favorite(FavoriteCreate(userId=bob.id), current_user=as_principal(ada), db=db_session)

    assert first["created"] is True
    assert second["created"] is False
    assert db_session.query(Favorite).count() == 1

    notifications = db_session.query(Notification).filter(Notification.user_id == bob.id).all()
    assert len(notifications) == 2
    assert {n.type for n in notifications} == {"favorite"}
    assert notifications[0].title == "New connection!"
    assert notifications[0].link == f"/user/{ada.id}"


def test_cannot_favorite_self(db_session, make_user, as_principal):
    ada = make_user()
    with pytest.raises(HTTPException) as exc:
        add_favorite(FavoriteCreate(userId=ada.id), current_user=as_principal(ada), db=db_session)
    assert exc.value.status_code == 400
    assert db_session.query(Notification).count() == 0


def test_favorite_missing_user_is_404(db_session, make_user, as_principal):
    ada = make_user()
    with pytest.raises(HTTPException) as exc:
        add_favorite(FavoriteCreate(userId=999), current_user=as_principal(ada), db=db_session)
    assert exc.value.status_code == 404


def test_favorites_lists_both_directions(db_session, make_user, as_principal):
    ada = make_user(name="Ada")
    bob = make_user(name="Bob")
    cat = make_user(name="Cat")
    add_favorite(FavoriteCreate(userId=bob.id), current_user=as_principal(ada), db=db_session)
    add_favorite(FavoriteCreate(userId=cat.id), current_user=as_principal(ada), db=db_session)
    add_favorite(FavoriteCreate(userId=ada.id), current_user=as_principal(cat), db=db_session)

    mine = get_my_favorites(current_user=as_principal(ada), db=db_session)
    assert [u["id"] for u in mine["favorites"]] == [cat.id, bob.id]

    fans = get_users_who_favorited_me(current_user=as_principal(ada), db=db_session)
    assert [u["id"] for u in fans["users"]] == [cat.id]


def test_remove_favorite_updates_profile_flag(db_session, make_user, as_principal):
    ada = make_user()
    bob = make_user()
    add_favorite(FavoriteCreate(userId=bob.id), current_user=as_principal(ada), db=db_session)

    profile = get_user_profile(bob.id, current_user=as_principal(ada), db=db_session)
    assert profile["user"]["isFavorite"] is True

    assert remove_favorite(bob.id, current_user=as_principal(ada), db=db_session)["removed"] is True
    assert remove_favorite(bob.id, current_user=as_principal(ada), db=db_session)["removed"] is False

    profile = get_user_profile(bob.id, current_user=as_principal(ada), db=db_session)
    assert profile["user"]["isFavorite"] is False


def test_favorite_sends_email_copy_when_enabled(db_session, make_user, as_principal, captured_emails):
    ada = make_user(name="Ada")
    bob = make_user(name="Bob", email="bob@skillswap.com")

    add_favorite(FavoriteCreate(userId=bob.id), current_user=as_principal(ada), db=db_session)

    assert len(captured_emails) == 1
    assert captured_emails[0]["to"] == "bob@skillswap.com"
    assert captured_emails[0]["subject"] == "Someone favorited you on SkillSwap"


def test_concurrent_duplicate_favorite_is_not_an_error(db_session, make_user, as_principal, monkeypatch):
    from app.crud import favorite as favorite_crud

    ada = make_user()
    bob = make_user()
    db_session.add(Favorite(user_id=ada.id, favorited_user_id=bob.id))
    db_session.commit()

    # The first existence check misses the row another request just inserted
    real_get_favorite = favorite_crud.get_favorite
    calls = {"n": 0}

    def stale_get_favorite(db, user_id, favorited_user_id):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return real_get_favorite(db, user_id, favorited_user_id)

    monkeypatch.setattr(favorite_crud, "get_favorite", stale_get_favorite)

    result = add_favorite(FavoriteCreate(userId=bob.id), current_user=as_principal(ada), db=db_session)

    assert result == {"success": True, "created": False}
    assert db_session.query(Favorite).count() == 1
    assert db_session.query(Notification).filter(Notification.user_id == bob.id).count() == 1
