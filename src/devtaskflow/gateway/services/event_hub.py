"""EventHub -- 内存中事件广播器

每个订阅者持有一个 asyncio.Queue，支持 subscribe/unsubscribe/broadcast。
单一广播频道：所有订阅者收到所有事件，不按 owner 过滤，不做回放。
队列写满的订阅者被踢出，并收到 SUBSCRIBER_DROPPED 以便断开重连。
"""

import asyncio

import structlog
from devtaskflow.core.config import SUBSCRIBER_QUEUE_MAXSIZE
from devtaskflow.core.models import PushEvent

log = structlog.get_logger()

# 被踢出的订阅者队列里只剩这个结束标记，消费方见到即关闭连接
SUBSCRIBER_DROPPED = object()


class EventHub:
    """推送事件广播器 -- 基于 asyncio.Queue 的发布/订阅模式"""

    def __init__(self, queue_maxsize: int = SUBSCRIBER_QUEUE_MAXSIZE) -> None:
        self._subscribers: set[asyncio.Queue] = set()
        self._queue_maxsize = queue_maxsize

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def subscribe(self) -> asyncio.Queue:
        """订阅广播频道

        Returns:
            asyncio.Queue 实例，新事件会被推送到此队列
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_maxsize)
        self._subscribers.add(queue)
        log.info("push_subscriber_connected", subscriber_count=len(self._subscribers))
        return queue

    async def unsubscribe(self, queue: asyncio.Queue) -> None:
        """取消订阅

        Args:
            queue: 之前订阅时返回的队列
        """
        self._subscribers.discard(queue)
        log.info(
            "push_subscriber_disconnected",
            subscriber_count=len(self._subscribers),
        )

    async def broadcast(self, event: PushEvent) -> None:
        """向当前所有订阅者广播事件

        Args:
            event: 要广播的事件
        """
        dead_queues = []
        for queue in self._subscribers:
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                dead_queues.append(queue)

        # 消费跟不上的订阅者视为掉线，需重连后重新拉取
        for q in dead_queues:
            self._evict(q)
        if dead_queues:
            log.warning("push_subscribers_dropped", dropped=len(dead_queues))

    def _evict(self, queue: asyncio.Queue) -> None:
        """踢出订阅者：清空积压事件，只留下结束标记"""
        self._subscribers.discard(queue)
        while True:
            try:
                queue.get_nowait()
            except asyncio.QueueEmpty:
                break
        queue.put_nowait(SUBSCRIBER_DROPPED)
