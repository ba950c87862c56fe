"""推送通道路由 -- SSE

GET /api/stream: 订阅全局广播频道。
事件名 task_update / task_status_update，data 为任务 JSON；
定期发送注释心跳保活。断线期间的事件不回放。
订阅者因积压被踢出时结束事件流，由 EventSource 自动重连。
"""

import asyncio
import json
from collections.abc import AsyncGenerator

import structlog
from devtaskflow.core.config import SSE_HEARTBEAT_INTERVAL
from devtaskflow.core.models import PushEvent
from fastapi import APIRouter, Depends
from sse_starlette.sse import EventSourceResponse

from ..deps import get_event_hub, get_identity
from ..services.event_hub import SUBSCRIBER_DROPPED, EventHub

log = structlog.get_logger()

router = APIRouter()


def _event_to_sse(event: PushEvent) -> dict:
    """将 PushEvent 转换为 sse-starlette 消息"""
    return {
        "event": event.type.value,
        "data": json.dumps(event.data, ensure_ascii=False),
    }


async def iter_push_events(
    event_hub: EventHub,
    heartbeat_interval: float = SSE_HEARTBEAT_INTERVAL,
) -> AsyncGenerator[dict, None]:
    """订阅广播频道并逐条产出 SSE 消息，生成器关闭时自动退订"""
    queue = await event_hub.subscribe()
    try:
        while True:
            try:
                event = await asyncio.wait_for(queue.get(), timeout=heartbeat_interval)
            except TimeoutError:
                # 心跳保活
                yield {"comment": "heartbeat"}
                continue
            if event is SUBSCRIBER_DROPPED:
                await log.ainfo("push_stream_closed_after_drop")
                return
            yield _event_to_sse(event)
    finally:
        await event_hub.unsubscribe(queue)


@router.get("/api/stream")
async def stream_events(
    _identity=Depends(get_identity),
    event_hub: EventHub = Depends(get_event_hub),
):
    """SSE 事件流端点（需要会话，但不按 owner 过滤事件）"""
    return EventSourceResponse(iter_push_events(event_hub))
