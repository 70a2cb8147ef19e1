"""Tests for LinkService and URL/title validation."""

import asyncio

import pytest

from linkvault.application.dtos.category import CategoryResult
from linkvault.application.dtos.link import LinkCreate, LinkUpdate
from linkvault.application.services import CacheInvalidator, LinkService
from linkvault.application.services.link_service import validate_title, validate_url
from linkvault.domain.exceptions import ErrorKind, LinkVaultException


@pytest.fixture
def service(link_repo, category_repo, invalidator) -> LinkService:
    return LinkService(link_repo, category_repo, invalidator)


def add_category(store, owner_id: int, name: str = "Dev") -> CategoryResult:
    category = CategoryResult(id=store.next_id(), name=name, user_id=owner_id)
    store.categories[category.id] = category
    return category


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com",
        "http://localhost:8000/path?q=1#frag",
        "ftp://files.example.org/pub",
        "mailto:someone@example.com",
        "  https://example.com/trimmed  ",
    ],
)
def test_valid_urls(url: str) -> None:
    assert validate_url(url) == url.strip()


@pytest.mark.parametrize(
    "url",
    ["", "   ", None, "example.com", "/relative/path", "https://", "http://host:99999", 42],
)
def test_invalid_urls(url) -> None:
    with pytest.raises(LinkVaultException) as exc_info:
        validate_url(url)
    assert exc_info.value.kind is ErrorKind.VALIDATION
    assert exc_info.value.details == {"field": "url"}


def test_title_is_trimmed_and_bounded() -> None:
    assert validate_title("  Docs ") == "Docs"
    assert validate_title("x" * 256) == "x" * 256
    for bad in ("", "   ", None, "x" * 257):
        with pytest.raises(LinkVaultException):
            validate_title(bad)


async def test_create_link(service, store) -> None:
    owner = store.add_user()
    category = add_category(store, owner)

    link = await service.create_link(
        owner,
        LinkCreate(title=" Docs ", url="https://docs.python.org", category_id=category.id),
    )

    assert link.title == "Docs"
    assert link.user_id == owner
    assert link.category_id == category.id
    assert store.links[link.id] == link
    assert store.commits == 1


async def test_create_link_with_foreign_category_is_not_found(service, store) -> None:
    alice = store.add_user("alice")
    bob = store.add_user("bob")
    bobs = add_category(store, bob)

    with pytest.raises(LinkVaultException) as exc_info:
        await service.create_link(
            alice, LinkCreate(title="x", url="https://x.io", category_id=bobs.id)
        )
    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    assert store.links == {}
    assert store.commits == 0


async def test_invalid_input_writes_nothing(service, store) -> None:
    owner = store.add_user()
    with pytest.raises(LinkVaultException):
        await service.create_link(owner, LinkCreate(title="", url="https://x.io"))
    assert store.links == {}


async def test_update_applies_only_sent_fields(service, store) -> None:
    owner = store.add_user()
    link = await service.create_link(
        owner, LinkCreate(title="Old", url="https://old.io", description="keep")
    )

    updated = await service.update_link(owner, link.id, LinkUpdate(title="New"))

    assert updated.title == "New"
    assert updated.url == "https://old.io"
    assert updated.description == "keep"


async def test_update_can_clear_nullable_fields(service, store) -> None:
    owner = store.add_user()
    category = add_category(store, owner)
    link = await service.create_link(
        owner,
        LinkCreate(title="t", url="https://t.io", description="d", category_id=category.id),
    )

    updated = await service.update_link(
        owner, link.id, LinkUpdate.from_fields({"description": None, "category_id": None})
    )
    assert updated.description is None
    assert updated.category_id is None


async def test_update_without_changes_returns_existing(service, store) -> None:
    owner = store.add_user()
    link = await service.create_link(owner, LinkCreate(title="t", url="https://t.io"))
    commits = store.commits

    assert await service.update_link(owner, link.id, LinkUpdate()) == link
    assert store.commits == commits


async def test_update_and_delete_foreign_link_is_not_found(service, store) -> None:
    alice = store.add_user("alice")
    bob = store.add_user("bob")
    link = await service.create_link(alice, LinkCreate(title="t", url="https://t.io"))

    with pytest.raises(LinkVaultException) as exc_info:
        await service.update_link(bob, link.id, LinkUpdate(title="mine"))
    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    with pytest.raises(LinkVaultException) as exc_info:
        await service.delete_link(bob, link.id)
    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    assert store.links[link.id].title == "t"


async def test_delete_link(service, store) -> None:
    owner = store.add_user()
    link = await service.create_link(owner, LinkCreate(title="t", url="https://t.io"))
    assert await service.delete_link(owner, link.id) == link
    assert store.links == {}


async def test_create_then_list_shows_new_link(service, queries, store) -> None:
    """Create, list (populates cache), create again, list: both links show."""
    owner = store.add_user()
    await service.create_link(owner, LinkCreate(title="First", url="https://1.io"))
    first = await queries.list_links(owner)
    assert [item.title for item in first.data] == ["First"]

    await service.create_link(owner, LinkCreate(title="Second", url="https://2.io"))
    second = await queries.list_links(owner)
    assert [item.title for item in second.data] == ["Second", "First"]


async def test_moving_link_refreshes_both_category_details(service, queries, store) -> None:
    owner = store.add_user()
    dev = add_category(store, owner, "Dev")
    ops = add_category(store, owner, "Ops")
    link = await service.create_link(
        owner, LinkCreate(title="t", url="https://t.io", category_id=dev.id)
    )
    assert len((await queries.get_category_with_links(owner, dev.id)).links) == 1
    assert len((await queries.get_category_with_links(owner, ops.id)).links) == 0
    cached_item = await queries.get_link(owner, link.id)
    assert cached_item.category_name == "Dev"

    await service.update_link(owner, link.id, LinkUpdate(category_id=ops.id))

    assert len((await queries.get_category_with_links(owner, dev.id)).links) == 0
    assert len((await queries.get_category_with_links(owner, ops.id)).links) == 1
    assert (await queries.get_link(owner, link.id)).category_name == "Ops"


class GatedVersionCache:
    """Holds every version write until release is set; records pattern wipes."""

    def __init__(self, inner) -> None:
        self.inner = inner
        self.release = asyncio.Event()
        self.wiped = asyncio.Event()

    def is_available(self) -> bool:
        return self.inner.is_available()

    async def get(self, key):
        return await self.inner.get(key)

    async def set(self, key, value, ttl=300):
        if key.startswith("version:"):
            await self.release.wait()
        return await self.inner.set(key, value, ttl)

    async def delete_pattern(self, pattern):
        deleted = await self.inner.delete_pattern(pattern)
        self.wiped.set()
        return deleted


async def test_timed_out_create_still_invalidates(
    service, link_repo, category_repo, cache, queries, store
) -> None:
    """A request cancelled mid-invalidation still retires the cached listing."""
    owner = store.add_user()
    await service.create_link(owner, LinkCreate(title="First", url="https://1.io"))
    assert [item.title for item in (await queries.list_links(owner)).data] == ["First"]

    gated = GatedVersionCache(cache)
    slow = LinkService(link_repo, category_repo, CacheInvalidator(gated))
    with pytest.raises(TimeoutError):
        await asyncio.wait_for(
            slow.create_link(owner, LinkCreate(title="Second", url="https://2.io")), 0.05
        )
    gated.release.set()
    await asyncio.wait_for(gated.wiped.wait(), 1)

    page = await queries.list_links(owner)
    assert [item.title for item in page.data] == ["Second", "First"]
