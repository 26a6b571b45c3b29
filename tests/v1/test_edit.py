# tests/v1/test_edit.py
"""Tests for editing posts, including moderator flag changes."""

from unittest.mock import patch

import pytest
from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from forum_stage.models import (
    Community,
    CommunityModerator,
    CommunityUserBan,
    ModLockPost,
    ModRemovePost,
    Post,
    User,
)
from forum_stage.repositories.modlog_repo import ModerationLog


def _edit(client, post, token, **overrides):
    payload = {
        "edit_id": post.id,
        "creator_id": post.creator_id,
        "community_id": post.community_id,
        "name": "Edited title",
        "url": post.url,
        "body": "Edited body",
        "nsfw": False,
        "auth": token,
    }
    payload.update(overrides)
    return client.put("/api/v1/post", json=payload)


def _stored(db_session, post_id) -> Post:
    db_session.expire_all()
    return db_session.get(Post, post_id)


def test_creator_can_edit(client, db_session, test_post, creator, token_for) -> None:
    """Test that the author can edit their own post."""
    response = _edit(client, test_post, token_for(creator))
    assert response.status_code == status.HTTP_200_OK

    post = response.json()["post"]
    assert post["name"] == "Edited title"
    assert post["body"] == "Edited body"
    assert post["updated"] is not None
    assert _stored(db_session, test_post.id).name == "Edited title"


@pytest.mark.parametrize("editor_fixture", ["moderator", "admin_user"])
def test_moderators_and_admins_can_edit(
    request, client, test_post, token_for, editor_fixture
) -> None:
    """Test that community moderators and site admins may edit any post."""
    editor = request.getfixturevalue(editor_fixture)
    response = _edit(client, test_post, token_for(editor))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["post"]["name"] == "Edited title"


def test_other_user_cannot_edit(client, db_session, test_post, other_user, token_for) -> None:
    """Test that users without authority get EditNotAllowed."""
    response = _edit(client, test_post, token_for(other_user))
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"op": "EditPost", "error": "no_post_edit_allowed"}
    assert _stored(db_session, test_post.id).name == "Baseline post"


def test_authority_uses_stored_community(
    client, db_session, test_post, creator, moderator, token_for
) -> None:
    """Test that authority is judged on the post's stored community, not the request's."""
    db_session.add(Community(id=6, name="side", title="Side", creator_id=creator.id))
    outsider = User(id=9, name="grace")
    db_session.add(outsider)
    db_session.commit()
    db_session.add(CommunityModerator(community_id=6, user_id=outsider.id))
    db_session.commit()

    # Moderating the community named in the request grants nothing.
    denied = _edit(client, test_post, token_for(outsider), community_id=6)
    assert denied.status_code == status.HTTP_403_FORBIDDEN
    assert denied.json()["error"] == "no_post_edit_allowed"

    # Moderating only the current community is not enough to move the post away.
    kept = _edit(client, test_post, token_for(moderator), community_id=6)
    assert kept.status_code == status.HTTP_403_FORBIDDEN
    assert kept.json()["error"] == "no_post_edit_allowed"
    assert _stored(db_session, test_post.id).community_id == test_post.community_id

    # The creator holds authority in both communities and may move it.
    moved = _edit(client, test_post, token_for(creator), community_id=6)
    assert moved.status_code == status.HTTP_200_OK
    assert moved.json()["post"]["community_id"] == 6
    assert _stored(db_session, test_post.id).community_id == 6


def test_move_into_banning_community_is_refused(
    client, db_session, test_post, creator, token_for
) -> None:
    """Test that a post cannot be moved into a community that bans the editor."""
    db_session.add(Community(id=6, name="side", title="Side", creator_id=creator.id))
    db_session.commit()
    db_session.add(CommunityUserBan(community_id=6, user_id=creator.id))
    db_session.commit()

    response = _edit(client, test_post, token_for(creator), community_id=6)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"op": "EditPost", "error": "community_ban"}

    stored = _stored(db_session, test_post.id)
    assert stored.community_id == test_post.community_id
    assert stored.name == "Baseline post"


def test_authorship_cannot_be_reassigned(
    client, db_session, test_post, creator, other_user, token_for
) -> None:
    """Test that an edit naming a different creator is refused."""
    response = _edit(client, test_post, token_for(creator), creator_id=other_user.id)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"op": "EditPost", "error": "no_post_edit_allowed"}

    stored = _stored(db_session, test_post.id)
    assert stored.creator_id == creator.id
    assert stored.name == "Baseline post"


def test_edit_rejects_disallowed_content_before_auth(
    client, db_session, test_post, disallowed_terms
) -> None:
    """Test that content is screened even before the caller is identified."""
    response = _edit(client, test_post, None, name=f"{disallowed_terms} title")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"op": "EditPost", "error": "no_slurs"}
    assert _stored(db_session, test_post.id).name == "Baseline post"


def test_edit_requires_authentication(client, test_post) -> None:
    """Test that anonymous callers cannot edit."""
    response = _edit(client, test_post, None)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"op": "EditPost", "error": "not_logged_in"}


def test_edit_nonexistent_post(client, test_post, creator, token_for) -> None:
    """Test editing a post that does not exist."""
    response = _edit(client, test_post, token_for(creator), edit_id=99999)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"op": "EditPost", "error": "couldnt_find_post"}


def test_edit_community_banned(client, db_session, test_post, creator, token_for) -> None:
    """Test that a community ban blocks editing even one's own post."""
    db_session.add(CommunityUserBan(community_id=test_post.community_id, user_id=creator.id))
    db_session.commit()

    response = _edit(client, test_post, token_for(creator))
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"op": "EditPost", "error": "community_ban"}


def test_remove_and_lock_are_logged(client, db_session, test_post, moderator, token_for) -> None:
    """Test that moderator flag changes are written to the moderation log."""
    response = _edit(
        client,
        test_post,
        token_for(moderator),
        removed=True,
        locked=True,
        reason="spam",
    )
    assert response.status_code == status.HTTP_200_OK
    post = response.json()["post"]
    assert post["removed"] is True
    assert post["locked"] is True

    removals = db_session.execute(select(ModRemovePost)).scalars().all()
    locks = db_session.execute(select(ModLockPost)).scalars().all()
    assert [(r.mod_user_id, r.post_id, r.removed, r.reason) for r in removals] == [
        (moderator.id, test_post.id, True, "spam")
    ]
    assert [(entry.mod_user_id, entry.post_id, entry.locked) for entry in locks] == [
        (moderator.id, test_post.id, True)
    ]


def test_false_flag_is_logged(client, db_session, test_post, moderator, token_for) -> None:
    """Test that an explicit restore is logged even when nothing changes."""
    response = _edit(client, test_post, token_for(moderator), removed=False)
    assert response.status_code == status.HTTP_200_OK

    removals = db_session.execute(select(ModRemovePost)).scalars().all()
    assert [entry.removed for entry in removals] == [False]
    assert db_session.execute(select(ModLockPost)).scalars().all() == []


def test_omitted_flags_are_unchanged(client, db_session, test_post, creator, token_for) -> None:
    """Test that leaving a flag out keeps its stored value."""
    test_post.locked = True
    test_post.deleted = True
    db_session.commit()

    response = _edit(client, test_post, token_for(creator))
    assert response.status_code == status.HTTP_200_OK

    stored = _stored(db_session, test_post.id)
    assert stored.locked is True
    assert stored.deleted is True
    assert stored.removed is False
    assert db_session.execute(select(ModLockPost)).scalars().all() == []


def test_omitted_content_fields_are_cleared(
    client, db_session, test_post, creator, token_for
) -> None:
    """Test that content fields are replaced wholesale, not merged."""
    payload_overrides = {"url": None, "body": None}
    response = _edit(client, test_post, token_for(creator), **payload_overrides)
    assert response.status_code == status.HTTP_200_OK

    stored = _stored(db_session, test_post.id)
    assert stored.url is None
    assert stored.body is None


def test_edit_site_banned(client, db_session, test_post, banned_user, token_for) -> None:
    """Test that a site ban blocks editing even for a community moderator."""
    db_session.add(CommunityModerator(community_id=test_post.community_id, user_id=banned_user.id))
    db_session.commit()

    response = _edit(client, test_post, token_for(banned_user))
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"op": "EditPost", "error": "site_ban"}
    assert _stored(db_session, test_post.id).name == "Baseline post"


def test_failed_log_write_rolls_back_edit(
    client, db_session, test_post, moderator, token_for
) -> None:
    """Test that the edit is not kept when its moderation log entry cannot be written."""
    with patch.object(ModerationLog, "record_removal", side_effect=SQLAlchemyError("boom")):
        response = _edit(client, test_post, token_for(moderator), name="x", removed=True)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"op": "EditPost", "error": "couldnt_update_post"}

    stored = _stored(db_session, test_post.id)
    assert stored.removed is False
    assert stored.name == "Baseline post"
    assert stored.updated is None
    assert db_session.execute(select(ModRemovePost)).scalars().all() == []
