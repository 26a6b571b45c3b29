# tests/test_post_repo.py
"""Tests for the post store: flag edits and field replacement."""

import pytest

from forum_stage.repositories.post_repo import FlagEdit, PostForm, PostRepository
from forum_stage.schemas.post import ListingType, SortType


@pytest.mark.parametrize(
    ("value", "current", "expected"),
    [
        (None, True, True),
        (None, False, False),
        (True, False, True),
        (False, True, False),
    ],
)
def test_flag_edit(value, current, expected) -> None:
    """Test that only an explicit value changes a flag."""
    assert FlagEdit.from_optional(value).apply(current) is expected


def test_create_defaults(db_session, creator, community) -> None:
    """Test that new posts start unflagged and never edited."""
    post = PostRepository(db_session).create(
        PostForm(name="Fresh", creator_id=creator.id, community_id=community.id)
    )
    assert post.id is not None
    assert (post.removed, post.deleted, post.locked, post.nsfw) == (False, False, False, False)
    assert post.updated is None


def test_update_replaces_content(db_session, test_post, creator, community) -> None:
    """Test that update writes every content field and stamps the edit time."""
    repo = PostRepository(db_session)
    updated = repo.update(
        test_post.id,
        PostForm(
            name="Renamed",
            creator_id=creator.id,
            community_id=community.id,
            nsfw=True,
            locked=FlagEdit.SET_TRUE,
        ),
    )
    assert updated.name == "Renamed"
    assert updated.url is None
    assert updated.body is None
    assert updated.nsfw is True
    assert updated.locked is True
    assert updated.removed is False
    assert updated.updated is not None


def test_update_missing_post(db_session, creator, community) -> None:
    """Test that updating an unknown id returns None."""
    form = PostForm(name="x", creator_id=creator.id, community_id=community.id)
    assert PostRepository(db_session).update(99999, form) is None


def test_read_view_counts(db_session, test_post, creator) -> None:
    """Test that the view reflects the viewer's state."""
    view = PostRepository(db_session).read_view(test_post.id, creator.id)
    assert view.creator_name == "alice"
    assert view.score == 0
    assert view.user_id == creator.id
    assert PostRepository(db_session).read_view(99999) is None


def test_community_listing_without_id_lists_all(db_session, test_post) -> None:
    """Test that a Community listing without a community id behaves like All."""
    views = PostRepository(db_session).list_views(
        listing_type=ListingType.COMMUNITY,
        sort=SortType.TOP_ALL,
    )
    assert [view.id for view in views] == [test_post.id]
