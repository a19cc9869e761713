"""
Tests for the MongoDB branch of the repositories, run against mongomock.
"""
from __future__ import annotations

from datetime import UTC, datetime

import mongomock
import pytest

from src.domain.entities.post import CommentEntry, LikeEntry, PostEntity
from src.domain.entities.profile import ExperienceEntry, ProfileEntity, SocialLinks
from src.infrastructure.database.mongo_client import (
    PROFILES,
    DuplicateKeyViolation,
    ensure_indexes,
    new_id,
)
from src.infrastructure.database.repositories.post_repository import PostRepository
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.repositories.user_repository import UserRepository


@pytest.fixture()
def db():
    database = mongomock.MongoClient()["devconnect"]
    ensure_indexes(database)
    return database


def _profile(user_id: str, handle: str = "jane") -> ProfileEntity:
    return ProfileEntity(
        id=new_id(),
        user=user_id,
        handle=handle,
        status="Developer",
        skills=["python", "mongodb"],
        date=datetime.now(UTC),
        website="https://jane.dev",
        social=SocialLinks(twitter="https://twitter.com/jane"),
    )


class TestUserRepository:
    def test_create_and_lookup(self, db):
        users = UserRepository(db)

        created = users.create("Jane", "jane@devconnect.io", "hash", "//gravatar")

        found = users.get(created.id)
        assert found.email == "jane@devconnect.io"
        assert found.password == "hash"
        assert users.get_by_email("jane@devconnect.io").id == created.id

    def test_duplicate_email_rejected(self, db):
        users = UserRepository(db)
        users.create("Jane", "jane@devconnect.io", "hash", "//gravatar")

        with pytest.raises(DuplicateKeyViolation) as exc:
            users.create("Other", "jane@devconnect.io", "hash", "//gravatar")

        assert exc.value.field == "email"

    def test_malformed_id_is_missing(self, db):
        assert UserRepository(db).get("not-an-object-id") is None

    def test_delete(self, db):
        users = UserRepository(db)
        created = users.create("Jane", "jane@devconnect.io", "hash", "//gravatar")

        assert users.delete(created.id) is True
        assert users.get(created.id) is None
        assert users.delete(created.id) is False


class TestProfileRepository:
    def test_experience_round_trip(self, db):
        profiles = ProfileRepository(db)
        user_id = new_id()
        profile = profiles.create(_profile(user_id))
        entry = ExperienceEntry(
            id=new_id(),
            title="Engineer",
            company="Acme",
            from_date=datetime(2020, 1, 1, tzinfo=UTC),
            location="Remote",
            current=True,
        )
        profile.experience.insert(0, entry)
        profiles.save(profile)

        loaded = profiles.get_by_user(user_id)

        assert loaded.id == profile.id
        assert loaded.handle == "jane"
        assert loaded.skills == ["python", "mongodb"]
        assert loaded.social.twitter == "https://twitter.com/jane"
        assert len(loaded.experience) == 1
        stored = loaded.experience[0]
        assert stored.id == entry.id
        assert (stored.title, stored.company, stored.location) == ("Engineer", "Acme", "Remote")
        assert stored.from_date.year == 2020
        assert stored.to_date is None
        assert stored.current is True

    def test_entries_stored_under_from_and_to(self, db):
        profiles = ProfileRepository(db)
        profile = _profile(new_id())
        profile.experience.append(
            ExperienceEntry(
                id=new_id(),
                title="Engineer",
                company="Acme",
                from_date=datetime(2020, 1, 1, tzinfo=UTC),
            )
        )
        profiles.create(profile)

        raw = db[PROFILES].find_one({"handle": "jane"})

        assert "from" in raw["experience"][0]
        assert "from_date" not in raw["experience"][0]

    def test_lookup_by_handle_and_list(self, db):
        profiles = ProfileRepository(db)
        profiles.create(_profile(new_id(), handle="jane"))
        profiles.create(_profile(new_id(), handle="john"))

        assert profiles.get_by_handle("john").handle == "john"
        assert profiles.get_by_handle("nobody") is None
        assert sorted(p.handle for p in profiles.list_all()) == ["jane", "john"]

    def test_duplicate_handle_rejected(self, db):
        profiles = ProfileRepository(db)
        profiles.create(_profile(new_id(), handle="jane"))

        with pytest.raises(DuplicateKeyViolation) as exc:
            profiles.create(_profile(new_id(), handle="jane"))

        assert exc.value.field == "handle"

    def test_delete_by_user(self, db):
        profiles = ProfileRepository(db)
        user_id = new_id()
        profiles.create(_profile(user_id))

        assert profiles.delete_by_user(user_id) is True
        assert profiles.get_by_user(user_id) is None


class TestPostRepository:
    def test_likes_and_comments_round_trip(self, db):
        posts = PostRepository(db)
        author, fan = new_id(), new_id()
        post = posts.create(
            PostEntity(
                id=new_id(),
                user=author,
                text="hello world",
                name="Jane",
                avatar="//gravatar",
                date=datetime.now(UTC),
            )
        )
        post.likes.insert(0, LikeEntry(id=new_id(), user=fan))
        post.comments.insert(
            0,
            CommentEntry(
                id=new_id(),
                user=fan,
                text="nice post there",
                name="Fan",
                avatar=None,
                date=datetime.now(UTC),
            ),
        )
        posts.save(post)

        loaded = posts.get(post.id)

        assert loaded.user == author
        assert loaded.text == "hello world"
        assert [l.user for l in loaded.likes] == [fan]
        assert loaded.likes[0].id == post.likes[0].id
        assert [(c.id, c.user, c.text, c.name) for c in loaded.comments] == [
            (post.comments[0].id, fan, "nice post there", "Fan")
        ]
        assert loaded.liked_by(fan)

    def test_list_newest_first(self, db):
        posts = PostRepository(db)
        for day in (1, 3, 2):
            posts.create(
                PostEntity(
                    id=new_id(),
                    user=new_id(),
                    text=f"post of day {day}",
                    name="Jane",
                    avatar=None,
                    date=datetime(2024, 1, day, tzinfo=UTC),
                )
            )

        assert [p.text for p in posts.list_all()] == [
            "post of day 3",
            "post of day 2",
            "post of day 1",
        ]

    def test_delete(self, db):
        posts = PostRepository(db)
        post = posts.create(
            PostEntity(
                id=new_id(),
                user=new_id(),
                text="hello world",
                name="Jane",
                avatar=None,
                date=datetime.now(UTC),
            )
        )

        assert posts.delete(post.id) is True
        assert posts.get(post.id) is None
