"""Tests for RelationStore."""
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from models.relation import RelationKind
from services.exceptions import DuplicateRelationError, SubjectNotFoundError, UserNotFoundError
from services.relation_store import RelationStore
from tests.conftest import MakeTuit, MakeUser


class TestInsertAndExists:
    """Tests for insert / exists / get."""

    async def test__insert__creates_relation(
        self, db_session: AsyncSession, make_user: MakeUser, make_tuit: MakeTuit,
    ) -> None:
        user = await make_user()
        tuit = await make_tuit(user)
        store = RelationStore(db_session, RelationKind.LIKE)

        relation = await store.insert(user.id, tuit.id)

        assert relation.actor_id == user.id
        assert relation.subject_id == tuit.id
        assert relation.kind == "like"
        assert await store.exists(user.id, tuit.id) is True
        fetched = await store.get(user.id, tuit.id)
        assert fetched is not None
        assert fetched.id == relation.id

    async def test__exists__false_when_absent(
        self, db_session: AsyncSession, make_user: MakeUser, make_tuit: MakeTuit,
    ) -> None:
        user = await make_user()
        tuit = await make_tuit(user)
        store = RelationStore(db_session, RelationKind.BOOKMARK)

        assert await store.exists(user.id, tuit.id) is False
        assert await store.get(user.id, tuit.id) is None

    async def test__insert__duplicate_raises_and_session_stays_usable(
        self, db_session: AsyncSession, make_user: MakeUser, make_tuit: MakeTuit,
    ) -> None:
        user = await make_user()
        tuit = await make_tuit(user)
        store = RelationStore(db_session, RelationKind.LIKE)
        await store.insert(user.id, tuit.id)

        with pytest.raises(DuplicateRelationError):
            await store.insert(user.id, tuit.id)

        assert await store.count_by_subject(tuit.id) == 1

    async def test__insert__missing_tuit_raises_subject_not_found(
        self, db_session: AsyncSession, make_user: MakeUser,
    ) -> None:
        user = await make_user()
        store = RelationStore(db_session, RelationKind.LIKE)

        with pytest.raises(SubjectNotFoundError):
            await store.insert(user.id, uuid4())

    async def test__insert__missing_user_raises_user_not_found(
        self, db_session: AsyncSession, make_user: MakeUser, make_tuit: MakeTuit,
    ) -> None:
        author = await make_user()
        tuit = await make_tuit(author)
        store = RelationStore(db_session, RelationKind.LIKE)

        with pytest.raises(UserNotFoundError):
            await store.insert(uuid4(), tuit.id)

    async def test__kinds_are_independent(
        self, db_session: AsyncSession, make_user: MakeUser, make_tuit: MakeTuit,
    ) -> None:
        """A like and a bookmark on the same tuit are separate facts."""
        user = await make_user()
        tuit = await make_tuit(user)
        likes = RelationStore(db_session, RelationKind.LIKE)
        bookmarks = RelationStore(db_session, RelationKind.BOOKMARK)

        await likes.insert(user.id, tuit.id)

        assert await likes.exists(user.id, tuit.id) is True
        assert await bookmarks.exists(user.id, tuit.id) is False
        await bookmarks.insert(user.id, tuit.id)
        assert await likes.count_by_subject(tuit.id) == 1
        assert await bookmarks.count_by_subject(tuit.id) == 1


class TestRemove:
    """Tests for remove and the bulk removals."""

    async def test__remove__returns_true_then_false(
        self, db_session: AsyncSession, make_user: MakeUser, make_tuit: MakeTuit,
    ) -> None:
        user = await make_user()
        tuit = await make_tuit(user)
        store = RelationStore(db_session, RelationKind.DISLIKE)
        await store.insert(user.id, tuit.id)

        assert await store.remove(user.id, tuit.id) is True
        assert await store.remove(user.id, tuit.id) is False
        assert await store.exists(user.id, tuit.id) is False

    async def test__remove_all_by_actor__returns_affected_subjects(
        self, db_session: AsyncSession, make_user: MakeUser, make_tuit: MakeTuit,
    ) -> None:
        user = await make_user()
        other = await make_user()
        tuit_a = await make_tuit(other)
        tuit_b = await make_tuit(other)
        store = RelationStore(db_session, RelationKind.BOOKMARK)
        await store.insert(user.id, tuit_a.id)
        await store.insert(user.id, tuit_b.id)
        await store.insert(other.id, tuit_a.id)

        affected = await store.remove_all_by_actor(user.id)

        assert set(affected) == {tuit_a.id, tuit_b.id}
        assert await store.count_by_subject(tuit_a.id) == 1
        assert await store.count_by_subject(tuit_b.id) == 0

    async def test__remove_all_by_actor__only_touches_its_kind(
        self, db_session: AsyncSession, make_user: MakeUser, make_tuit: MakeTuit,
    ) -> None:
        user = await make_user()
        tuit = await make_tuit(user)
        likes = RelationStore(db_session, RelationKind.LIKE)
        bookmarks = RelationStore(db_session, RelationKind.BOOKMARK)
        await likes.insert(user.id, tuit.id)
        await bookmarks.insert(user.id, tuit.id)

        await bookmarks.remove_all_by_actor(user.id)

        assert await likes.exists(user.id, tuit.id) is True

    async def test__remove_all_by_subject__returns_count(
        self, db_session: AsyncSession, make_user: MakeUser, make_tuit: MakeTuit,
    ) -> None:
        u1 = await make_user()
        u2 = await make_user()
        tuit = await make_tuit(u1)
        store = RelationStore(db_session, RelationKind.LIKE)
        await store.insert(u1.id, tuit.id)
        await store.insert(u2.id, tuit.id)

        assert await store.remove_all_by_subject(tuit.id) == 2
        assert await store.count_by_subject(tuit.id) == 0


class TestListing:
    """Tests for list_by_subject / list_by_actor."""

    async def test__list_by_subject__populates_actor(
        self, db_session: AsyncSession, make_user: MakeUser, make_tuit: MakeTuit,
    ) -> None:
        u1 = await make_user()
        u2 = await make_user()
        tuit = await make_tuit(u1)
        store = RelationStore(db_session, RelationKind.LIKE)
        await store.insert(u1.id, tuit.id)
        await store.insert(u2.id, tuit.id)

        relations = await store.list_by_subject(tuit.id)

        assert {r.actor.username for r in relations} == {u1.username, u2.username}

    async def test__list_by_actor__populates_subject_newest_first(
        self, db_session: AsyncSession, make_user: MakeUser, make_tuit: MakeTuit,
    ) -> None:
        user = await make_user()
        first = await make_tuit(user, "first")
        second = await make_tuit(user, "second")
        store = RelationStore(db_session, RelationKind.BOOKMARK)
        await store.insert(user.id, first.id)
        await store.insert(user.id, second.id)

        relations = await store.list_by_actor(user.id)

        assert [r.subject.tuit for r in relations] == ["second", "first"]
        assert relations[0].subject.author.id == user.id

    async def test__list_by_actor__empty_for_unknown_user(
        self, db_session: AsyncSession,
    ) -> None:
        store = RelationStore(db_session, RelationKind.LIKE)
        assert list(await store.list_by_actor(uuid4())) == []
