"""Store Protocol 接口定义

使用 Python Protocol 实现结构化子类型（duck typing），
请求处理与 Worker 只依赖此接口，测试可注入替身实现。
"""

from typing import Protocol

from ..models.enums import TaskStatus
from ..models.task import Task


class TaskStore(Protocol):
    """Task 存储接口"""

    async def insert(self, task: Task) -> int:
        """插入任务记录，返回生成的 id"""
        ...

    async def update_status(self, task_id: int, status: TaskStatus) -> None:
        """更新任务状态"""
        ...

    async def list_all(self) -> list[Task]:
        """查询全部任务"""
        ...
