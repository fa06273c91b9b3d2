"""Tests for the inbound reminder handler."""

import asyncio
from datetime import datetime, timedelta

import pytest

from domains.reminders.config import (
    REPLY_AMBIGUOUS_DELETE,
    REPLY_DISCOURAGED,
    REPLY_INCOMPLETE_CREATE,
    REPLY_NOT_UNDERSTOOD,
)
from domains.reminders.handler import handle_reminder_message
from domains.reminders.models import Repeat
from domains.reminders.scheduler import DeliveryScheduler

from conftest import FakeOracle

CREATE_FAJR = '{"action": "create", "text": "pray Fajr", "time": "5:00 AM", "repeat": "daily"}'


class TestCreate:
    """Create requests."""

    @pytest.mark.asyncio
    async def test_create_adds_one_reminder(self, store):
        oracle = FakeOracle(intent=CREATE_FAJR, gate="Encouraged")

        reply = await handle_reminder_message("chat-1", "Remind me to pray Fajr at 5 AM every day", store, oracle)

        assert reply == 'Reminder set for "pray Fajr" at 05:00 (daily)'
        assert len(store.for_owner("chat-1")) == 1
        reminder = store.scan_due("05:00")[0]
        assert reminder.repeat is Repeat.DAILY

    @pytest.mark.asyncio
    async def test_discouraged_is_vetoed(self, store):
        oracle = FakeOracle(
            intent='{"action": "create", "text": "watch movies for fun", "time": "21:00"}',
            gate="Discouraged"
        )

        reply = await handle_reminder_message("chat-1", "remind me to watch movies for fun at 9pm", store, oracle)

        assert reply == REPLY_DISCOURAGED
        assert len(store) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("gate", ["Permissible", "encouraged.", "Maybe?", RuntimeError("gate down")])
    async def test_non_discouraged_gate_creates(self, store, gate):
        oracle = FakeOracle(intent='{"action": "create", "text": "go to work", "time": "08:00"}', gate=gate)

        reply = await handle_reminder_message("chat-1", "remind me to go to work at 8", store, oracle)

        assert reply.startswith("Reminder set for")
        assert len(store) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("intent", [
        '{"action": "create", "text": "go to work"}',
        '{"action": "create", "time": "08:00"}',
    ])
    async def test_incomplete_create(self, store, intent):
        oracle = FakeOracle(intent=intent)

        reply = await handle_reminder_message("chat-1", "remind me", store, oracle)

        assert reply == REPLY_INCOMPLETE_CREATE
        assert len(store) == 0
        # Gate is never consulted
        assert len(oracle.prompts) == 1

    @pytest.mark.asyncio
    async def test_unparsable_intent(self, store):
        oracle = FakeOracle(intent="I'm not sure what you mean")

        reply = await handle_reminder_message("chat-1", "hello", store, oracle)

        assert reply == REPLY_NOT_UNDERSTOOD
        assert len(store) == 0


class TestDelete:
    """Delete requests."""

    @pytest.mark.asyncio
    async def test_delete_all(self, store):
        store.create("chat-1", "a", "10:00")
        store.create("chat-1", "b", "11:00")
        store.create("chat-2", "c", "12:00")
        oracle = FakeOracle(intent='{"action": "delete", "text": "ALL reminders"}')

        reply = await handle_reminder_message("chat-1", "delete all my reminders", store, oracle)

        assert reply.startswith("All your reminders have been deleted")
        assert store.for_owner("chat-1") == []
        assert len(store.for_owner("chat-2")) == 1

    @pytest.mark.asyncio
    async def test_delete_by_text(self, store):
        store.create("chat-1", "pray Fajr", "05:00", Repeat.DAILY)
        store.create("chat-1", "pray Fajr", "05:00", Repeat.DAILY)
        store.create("chat-1", "read", "21:00")
        oracle = FakeOracle(intent='{"action": "delete", "text": "pray Fajr"}')

        reply = await handle_reminder_message("chat-1", "delete my Fajr reminder", store, oracle)

        assert reply == 'Reminder "pray Fajr" deleted.'
        assert [r.text for r in store.for_owner("chat-1")] == ["read"]

    @pytest.mark.asyncio
    async def test_delete_nothing_matched(self, store):
        oracle = FakeOracle(intent='{"action": "delete", "text": "gym"}')

        reply = await handle_reminder_message("chat-1", "delete gym", store, oracle)

        assert reply == 'No reminder found for "gym".'

    @pytest.mark.asyncio
    async def test_delete_without_text_is_ambiguous(self, store):
        store.create("chat-1", "a", "10:00")
        oracle = FakeOracle(intent='{"action": "delete"}')

        reply = await handle_reminder_message("chat-1", "delete it", store, oracle)

        assert reply == REPLY_AMBIGUOUS_DELETE
        assert len(store) == 1


class TestList:
    """Listing skips the oracle."""

    @pytest.mark.asyncio
    async def test_list_reminders(self, store):
        store.create("chat-1", "read", "21:00")
        store.create("chat-1", "pray Fajr", "05:00", Repeat.DAILY)
        store.create("chat-2", "other", "06:00")
        oracle = FakeOracle()

        reply = await handle_reminder_message("chat-1", "  List Reminders ", store, oracle)

        assert reply.splitlines()[-2:] == [
            "- 05:00 (daily) - pray Fajr",
            "- 21:00 (once) - read",
        ]
        assert "other" not in reply
        assert oracle.prompts == []

    @pytest.mark.asyncio
    async def test_list_empty(self, store):
        reply = await handle_reminder_message("chat-1", "my reminders", store, FakeOracle())
        assert reply == "No active reminders."


@pytest.mark.asyncio
async def test_fajr_scenario(store, transport):
    """Create daily Fajr, deliver once per day, then delete it for good."""
    oracle = FakeOracle(intent=CREATE_FAJR, gate="Encouraged")
    delivery = DeliveryScheduler(store, oracle, transport)
    day_one = datetime(2026, 10, 19, 5, 0, 0)

    await handle_reminder_message("chat-1", "Remind me to pray Fajr at 5:00 AM daily", store, oracle)

    for seconds in range(0, 60, 3):
        await delivery.tick(day_one + timedelta(seconds=seconds))
    assert transport.deliver.await_count == 1

    await delivery.tick(day_one + timedelta(seconds=75))
    await delivery.tick(day_one + timedelta(days=1))
    assert transport.deliver.await_count == 2

    oracle.intent = '{"action": "delete", "text": "pray Fajr"}'
    await handle_reminder_message("chat-1", "delete my Fajr reminder", store, oracle)

    await delivery.tick(day_one + timedelta(days=1, seconds=75))
    await delivery.tick(day_one + timedelta(days=2))
    assert len(store) == 0
    assert transport.deliver.await_count == 2


class GatedOracle(FakeOracle):
    """FakeOracle whose gate call blocks until released."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.gate_reached = asyncio.Event()
        self.release = asyncio.Event()

    async def complete(self, prompt: str, temperature=None, **kwargs) -> str:
        if "Reply with one word only" in prompt:
            self.gate_reached.set()
            await self.release.wait()
        return await super().complete(prompt, temperature, **kwargs)


class TestSerialization:
    """Handler and delivery tick never run against the store together."""

    @pytest.mark.asyncio
    async def test_tick_waits_for_handler(self, store, transport):
        oracle = GatedOracle(intent=CREATE_FAJR, gate="Encouraged")
        delivery = DeliveryScheduler(store, oracle, transport)
        fajr = datetime(2026, 10, 19, 5, 0, 0)

        handling = asyncio.create_task(
            handle_reminder_message("chat-1", "Remind me to pray Fajr at 5:00 AM daily", store, oracle)
        )
        await oracle.gate_reached.wait()

        ticking = asyncio.create_task(delivery.tick(fajr))
        for _ in range(5):
            await asyncio.sleep(0)

        assert not ticking.done()
        transport.deliver.assert_not_awaited()

        oracle.release.set()
        assert (await handling).startswith("Reminder set for")
        assert await ticking == 1
        transport.deliver.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_handler_waits_for_tick(self, store, transport):
        delivered = asyncio.Event()
        release = asyncio.Event()

        async def slow_deliver(owner, text):
            delivered.set()
            await release.wait()

        transport.deliver.side_effect = slow_deliver
        oracle = FakeOracle()
        delivery = DeliveryScheduler(store, oracle, transport)
        store.create("chat-1", "call mom", "05:00")

        ticking = asyncio.create_task(delivery.tick(datetime(2026, 10, 19, 5, 0, 0)))
        await delivered.wait()

        handling = asyncio.create_task(handle_reminder_message("chat-1", "my reminders", store, oracle))
        for _ in range(5):
            await asyncio.sleep(0)

        assert not handling.done()

        release.set()
        assert await ticking == 1
        assert await handling == "No active reminders."
