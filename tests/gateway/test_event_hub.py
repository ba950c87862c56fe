"""EventHub 测试"""

import asyncio

from devtaskflow.core.models import PushEvent, PushEventType
from devtaskflow.gateway.services.event_hub import SUBSCRIBER_DROPPED, EventHub


def _event(task_id: int = 1) -> PushEvent:
    return PushEvent(type=PushEventType.TASK_UPDATE, data={"id": task_id})


class TestEventHub:
    async def test_every_subscriber_receives_every_event(self):
        hub = EventHub()
        q1 = await hub.subscribe()
        q2 = await hub.subscribe()

        await hub.broadcast(_event(1))

        assert (await q1.get()).data == {"id": 1}
        assert (await q2.get()).data == {"id": 1}

    async def test_unsubscribed_queue_gets_nothing(self):
        hub = EventHub()
        queue = await hub.subscribe()
        await hub.unsubscribe(queue)

        await hub.broadcast(_event())

        assert queue.empty()
        assert hub.subscriber_count == 0

    async def test_broadcast_without_subscribers_is_noop(self):
        hub = EventHub()
        await hub.broadcast(_event())
        assert hub.subscriber_count == 0

    async def test_no_replay_for_late_subscriber(self):
        hub = EventHub()
        await hub.broadcast(_event(1))

        late = await hub.subscribe()
        assert late.empty()

    async def test_full_queue_subscriber_is_dropped(self):
        hub = EventHub(queue_maxsize=1)
        slow = await hub.subscribe()
        fast = await hub.subscribe()

        await hub.broadcast(_event(1))
        await fast.get()
        await hub.broadcast(_event(2))

        assert hub.subscriber_count == 1
        # 积压被清空，只剩结束标记
        assert slow.qsize() == 1
        assert slow.get_nowait() is SUBSCRIBER_DROPPED
        assert (await asyncio.wait_for(fast.get(), timeout=1)).data == {"id": 2}

    async def test_unsubscribe_twice_is_safe(self):
        hub = EventHub()
        queue = await hub.subscribe()
        await hub.unsubscribe(queue)
        await hub.unsubscribe(queue)
        assert hub.subscriber_count == 0

    async def test_dropped_subscriber_misses_later_events(self):
        hub = EventHub(queue_maxsize=2)
        slow = await hub.subscribe()

        for task_id in range(1, 4):
            await hub.broadcast(_event(task_id))
        await hub.broadcast(_event(99))

        assert slow.get_nowait() is SUBSCRIBER_DROPPED
        assert slow.empty()
