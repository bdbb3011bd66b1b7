"""Search: short-circuit on blank input, stale-response guard, failure handling."""

import asyncio

import pytest

from status_message import ControllerEvent, RemoteReadError
from conftest import ALICE, BOB, drain


@pytest.fixture
def seeded(store):
    store.publish(ALICE, "apple pie")
    store.publish(BOB, "about time")
    store.publish(BOB, "Rust programming")
    return store


@pytest.mark.parametrize("keyword", ["", "   ", "\t\n"])
@pytest.mark.asyncio
async def test_blank_keyword_makes_no_call(seeded, controller, keyword):
    assert await controller.search(keyword) == ()
    assert seeded.count("search_statuses") == 0
    assert controller.state.search_results == ()


@pytest.mark.asyncio
async def test_search_replaces_results(seeded, controller):
    results = await controller.search("Rust")
    assert [e.message for e in results] == ["Rust programming"]
    assert controller.state.search_results == results
    assert controller.state.query == "Rust"

    results = await controller.search("a")
    assert [e.message for e in results] == ["apple pie", "about time", "Rust programming"]
    assert controller.state.search_results == results


@pytest.mark.asyncio
async def test_search_works_without_sign_in(seeded, controller):
    results = await controller.search("pie")
    assert [(e.account_id, e.message) for e in results] == [(ALICE, "apple pie")]


@pytest.mark.asyncio
async def test_emptying_query_clears_results(seeded, controller):
    await controller.search("Rust")
    await controller.search("")
    assert controller.state.search_results == ()
    assert controller.state.query == ""


def _record_results(controller):
    applied = []

    def on_state(state):
        if not applied or applied[-1] != state.search_results:
            applied.append(state.search_results)
    controller.subscribe(on_state)
    return applied


@pytest.mark.asyncio
async def test_older_search_resolving_last_is_discarded(seeded, controller):
    applied = _record_results(controller)
    release_a = seeded.hold("search_statuses", "a")

    first = asyncio.create_task(controller.search("a"))
    await drain()
    second = asyncio.create_task(controller.search("ab"))
    ab_results = await second

    release_a.set()
    a_returned = await first

    assert [e.message for e in ab_results] == ["about time"]
    assert controller.state.search_results == ab_results
    assert a_returned == ab_results
    assert all(len(results) <= 1 for results in applied)


@pytest.mark.asyncio
async def test_older_search_resolving_first_is_discarded(seeded, controller):
    applied = _record_results(controller)
    release_a = seeded.hold("search_statuses", "a")
    release_ab = seeded.hold("search_statuses", "ab")

    first = asyncio.create_task(controller.search("a"))
    second = asyncio.create_task(controller.search("ab"))
    await drain()

    release_a.set()
    await first
    assert controller.state.search_results == ()
    assert controller.state.searching

    release_ab.set()
    await second
    assert [e.message for e in controller.state.search_results] == ["about time"]
    assert not controller.state.searching
    assert all(len(results) <= 1 for results in applied)


@pytest.mark.asyncio
async def test_clear_discards_in_flight_search(seeded, controller):
    release = seeded.hold("search_statuses")
    task = asyncio.create_task(controller.search("Rust"))
    await drain()

    controller.clear_search()
    release.set()
    await task

    assert controller.state.search_results == ()


@pytest.mark.asyncio
async def test_sign_out_discards_in_flight_search(seeded, controller):
    await controller.sign_in(ALICE)
    release = seeded.hold("search_statuses")
    task = asyncio.create_task(controller.search("Rust"))
    await drain()

    controller.sign_out()
    release.set()
    await task

    assert controller.state.search_results == ()


@pytest.mark.asyncio
async def test_failed_search_keeps_previous_results(seeded, controller):
    previous = await controller.search("Rust")
    seeded.fail("search_statuses", RuntimeError("indexer down"))

    with pytest.raises(RemoteReadError) as exc:
        await controller.search("pie")

    assert exc.value.view == "search"
    assert controller.state.search_results == previous
    assert not controller.state.searching
    assert any("indexer down" in notice for notice in controller.state.notices)


@pytest.mark.asyncio
async def test_failure_of_superseded_search_is_silent(seeded, controller):
    release_a = seeded.hold("search_statuses", "a")
    first = asyncio.create_task(controller.search("a"))
    await drain()
    await controller.search("Rust")

    seeded.fail("search_statuses", RuntimeError("late failure"))
    release_a.set()
    await first

    assert [e.message for e in controller.state.search_results] == ["Rust programming"]
    assert controller.state.notices == ()


@pytest.mark.asyncio
async def test_searched_event(seeded, controller):
    seen = []
    controller.add_event_handler(lambda event, payload: seen.append(event))
    await controller.search("Rust")
    assert ControllerEvent.SEARCHED in seen


@pytest.mark.asyncio
async def test_successful_search_clears_its_notice(seeded, controller):
    seeded.fail("search_statuses", RuntimeError("indexer down"))
    for _ in range(3):
        with pytest.raises(RemoteReadError):
            await controller.search("pie")
    assert len(controller.state.notices) == 1

    seeded.recover("search_statuses")
    await controller.search("pie")
    assert controller.state.notices == ()
