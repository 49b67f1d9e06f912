"""Task Domain Model

id 由 Store 在插入时分配，之后不可变；created_at 由服务端在创建时设定。
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from .enums import TaskStatus


class Task(BaseModel):
    """Task 数据模型 -- 系统唯一实体"""

    id: int | None = Field(default=None, description="Store 分配的自增 ID，插入前为 None")
    title: str = Field(description="任务标题")
    description: str = Field(default="", description="任务描述")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="当前状态")
    created_at: datetime = Field(description="创建时间（UTC）")


class TaskCreateRequest(BaseModel):
    """POST /tasks 请求体

    客户端提交的 id / status / created_at 一律忽略。
    """

    title: str = Field(description="任务标题")
    description: str = Field(default="", description="任务描述，null 视为空字符串")

    @field_validator("description", mode="before")
    @classmethod
    def _null_description_as_empty(cls, value):
        return "" if value is None else value
