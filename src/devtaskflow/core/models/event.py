"""PushEvent 模型 -- 推送通道中广播的事件"""

from pydantic import BaseModel, Field

from .enums import PushEventType


class PushEvent(BaseModel):
    """广播给所有订阅者的事件

    不区分 owner：任何连接中的订阅者都会收到。
    """

    type: PushEventType = Field(description="事件名")
    data: dict = Field(default_factory=dict, description="任务 JSON（完整或部分）")
