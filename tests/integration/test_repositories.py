"""Repository integration tests. Require Postgres; session is rolled back after each test."""

import uuid

import pytest

from linkvault.application.dtos.link import LinkCreate
from linkvault.domain.exceptions import ErrorKind, LinkVaultException
from linkvault.infrastructure.persistence.repositories import (
    CategoryRepository,
    LinkRepository,
    UserRepository,
)
from linkvault.infrastructure.persistence.repositories.link_repo import escape_like


async def _user(db_session, name: str = "repo") -> int:
    suffix = uuid.uuid4().hex[:8]
    user = await UserRepository(db_session).create_user(
        f"{name}-{suffix}", f"{name}-{suffix}@example.com", "hash"
    )
    return user.id


def test_escape_like() -> None:
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


@pytest.mark.requires_db
async def test_user_lookup_by_email_and_username(db_session) -> None:
    repo = UserRepository(db_session)
    created = await repo.create_user("repo-lookup", "repo-lookup@example.com", "hash")

    by_email = await repo.get_with_password(email="repo-lookup@example.com")
    by_username = await repo.get_with_password(username="repo-lookup")
    assert by_email == (created, "hash")
    assert by_username == (created, "hash")
    assert await repo.get_by_id(created.id) == created


@pytest.mark.requires_db
async def test_duplicate_username_is_a_conflict(db_session) -> None:
    repo = UserRepository(db_session)
    await repo.create_user("repo-dup", "repo-dup@example.com", "hash")
    with pytest.raises(LinkVaultException) as exc_info:
        await repo.create_user("repo-dup", "repo-dup-2@example.com", "hash")
    assert exc_info.value.kind is ErrorKind.CONFLICT


@pytest.mark.requires_db
async def test_category_names_unique_per_owner(db_session) -> None:
    alice = await _user(db_session, "alice")
    bob = await _user(db_session, "bob")
    repo = CategoryRepository(db_session)
    await repo.create_category(alice, "Dev")
    assert (await repo.create_category(bob, "Dev")).user_id == bob
    with pytest.raises(LinkVaultException) as exc_info:
        await repo.create_category(alice, "Dev")
    assert exc_info.value.kind is ErrorKind.CONFLICT


@pytest.mark.requires_db
async def test_owned_lookups_hide_other_owners(db_session) -> None:
    alice = await _user(db_session, "alice")
    bob = await _user(db_session, "bob")
    categories = CategoryRepository(db_session)
    links = LinkRepository(db_session)
    category = await categories.create_category(alice, "Private")
    link = await links.create_link(alice, LinkCreate("T", "https://t.io", None, category.id))

    assert await categories.get_owned(bob, category.id) is None
    assert await links.get_owned(bob, link.id) is None
    assert await links.update_link(bob, link.id, {"title": "x"}) is None
    assert await links.delete_owned(bob, link.id) is None
    assert await categories.delete_owned(bob, category.id) is None
    assert (await links.get_item(alice, link.id)).category_name == "Private"


@pytest.mark.requires_db
async def test_listing_filters_and_search(db_session) -> None:
    owner = await _user(db_session)
    categories = CategoryRepository(db_session)
    links = LinkRepository(db_session)
    dev = await categories.create_category(owner, "Dev")
    await links.create_link(owner, LinkCreate("Python tips", "https://a.io", None, dev.id))
    await links.create_link(owner, LinkCreate("News", "https://b.io", "all about PYTHON"))
    await links.create_link(owner, LinkCreate("100% cotton", "https://c.io"))

    assert await links.count_matching(owner, None, None) == 3
    assert await links.count_matching(owner, dev.id, None) == 1
    assert await links.count_matching(owner, None, "python") == 2
    # Wildcards in the term are literal.
    assert await links.count_matching(owner, None, "%") == 1
    assert await links.count_matching(owner, None, "_") == 0

    page = await links.list_matching(owner, None, None, limit=2, offset=0)
    assert [item.title for item in page] == ["100% cotton", "News"]
    rest = await links.list_matching(owner, None, None, limit=2, offset=2)
    assert [(item.title, item.category_name) for item in rest] == [("Python tips", "Dev")]


@pytest.mark.requires_db
async def test_category_delete_sets_link_category_null(db_session) -> None:
    owner = await _user(db_session)
    categories = CategoryRepository(db_session)
    links = LinkRepository(db_session)
    dev = await categories.create_category(owner, "Dev")
    link = await links.create_link(owner, LinkCreate("T", "https://t.io", None, dev.id))

    assert (await categories.delete_owned(owner, dev.id)).id == dev.id
    db_session.expire_all()

    item = await links.get_item(owner, link.id)
    assert item is not None
    assert (item.category_id, item.category_name) == (None, None)


@pytest.mark.requires_db
async def test_update_link_partial(db_session) -> None:
    owner = await _user(db_session)
    links = LinkRepository(db_session)
    link = await links.create_link(owner, LinkCreate("T", "https://t.io", "desc"))

    updated = await links.update_link(owner, link.id, {"title": "New", "description": None})
    assert updated is not None
    assert (updated.title, updated.url, updated.description) == ("New", "https://t.io", None)
