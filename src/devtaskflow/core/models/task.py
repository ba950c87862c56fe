"""Task Domain Model

tasks 表的一行即一个 Task，id 由存储层分配，owner（user_id）创建后不可变。
"""

from pydantic import BaseModel, Field

from .enums import TaskStatus


class Task(BaseModel):
    """Task 数据模型"""

    id: int = Field(description="唯一标识，由存储层自增分配")
    title: str = Field(min_length=1, description="任务标题")
    status: TaskStatus = Field(default=TaskStatus.OPEN, description="当前状态")
    commit_sha: str | None = Field(default=None, description="关联提交 SHA")
    user_id: str = Field(description="所属用户（外部身份 ID）")

    def to_payload(self) -> dict:
        """序列化为 HTTP 响应 / 推送事件使用的 JSON dict"""
        return self.model_dump(mode="json")
