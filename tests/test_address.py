import asyncio
import pytest
from linkpage.services.address import AddressResolver, build_share_url, resolve_address
from linkpage.services.page_service import normalize_username

# ========== TEST resolve_address ==========
@pytest.mark.parametrize("fragment", ["", None, "#"])
def test_resolve_address_empty(fragment):
    assert resolve_address(fragment) is None

def test_resolve_address_strips_marker():
    assert resolve_address("#bob") == "bob"

def test_resolve_address_strips_single_marker_only():
    assert resolve_address("##bob") == "#bob"

def test_resolve_address_without_marker():
    assert resolve_address("bob") == "bob"

# ========== TEST normalize_username ==========
@pytest.mark.parametrize("value", ["Bob Smith", "bobsmith", "BOBSMITH", " Bob\tSmith\n"])
def test_normalize_username_collapses_case_and_spaces(value):
    assert normalize_username(value) == "bobsmith"

@pytest.mark.parametrize("value", ["Bob ", "  A b C  ", "already", "", "ÉLodie M"])
def test_normalize_username_idempotent(value):
    once = normalize_username(value)
    assert normalize_username(once) == once

def test_normalize_username_none():
    assert normalize_username(None) == ""

# ========== TEST share url ==========
def test_build_share_url():
    assert build_share_url("http://localhost:5173/", "bob") == "http://localhost:5173/#bob"

def test_build_share_url_replaces_existing_fragment():
    assert build_share_url("https://links.example.com/app#alice", "bob") == "https://links.example.com/app#bob"

# ========== TEST AddressResolver ==========
def test_navigate_notifies_async_and_sync_listeners():
    resolver = AddressResolver("")
    seen = []

    async def on_change_async(fragment):
        seen.append(("async", fragment))

    resolver.subscribe(on_change_async)
    resolver.subscribe(lambda fragment: seen.append(("sync", fragment)))

    asyncio.run(resolver.navigate("#bob"))

    assert seen == [("async", "#bob"), ("sync", "#bob")]
    assert resolver.username == "bob"

def test_navigate_same_fragment_does_not_notify():
    resolver = AddressResolver("#bob")
    seen = []
    resolver.subscribe(seen.append)

    asyncio.run(resolver.navigate("#bob"))

    assert seen == []

def test_replace_is_silent():
    resolver = AddressResolver("")
    seen = []
    resolver.subscribe(seen.append)

    resolver.replace("#bob")

    assert resolver.fragment == "#bob"
    assert seen == []

def test_unsubscribe():
    resolver = AddressResolver("")
    seen = []
    unsubscribe = resolver.subscribe(seen.append)
    unsubscribe()

    asyncio.run(resolver.navigate("#bob"))

    assert seen == []
