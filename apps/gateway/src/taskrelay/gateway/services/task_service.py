"""TaskService -- 任务创建/查询业务逻辑

创建流程：
1. 解析并校验请求体（JSON 对象，title 必填）
2. 服务端强制 status=PENDING、created_at=now
3. 写入 Store 获得 id
4. 投递到 TaskChannel，由 Worker 异步完成（TaskService 必须持有通道）

写入失败时任务不会入队。
"""

import json
from datetime import UTC, datetime

import structlog
from pydantic import ValidationError
from taskrelay.core.errors import TaskValidationError
from taskrelay.core.models import Task, TaskCreateRequest, TaskStatus
from taskrelay.core.store import TaskStore

from .dispatch import TaskChannel

log = structlog.get_logger()


def parse_create_request(body: bytes) -> TaskCreateRequest:
    """将原始请求体解析为 TaskCreateRequest

    Raises:
        TaskValidationError: JSON 非法、不是对象，或字段校验失败
    """
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise TaskValidationError(f"Malformed JSON body: {e}") from e

    if not isinstance(payload, dict):
        raise TaskValidationError("Request body must be a JSON object")

    try:
        return TaskCreateRequest.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise TaskValidationError(f"Invalid task payload: {fields}") from e


class TaskService:
    """任务创建服务 -- 写入 Store 后必定投递到 TaskChannel"""

    def __init__(self, store: TaskStore, channel: TaskChannel) -> None:
        self._store = store
        self._channel = channel

    async def create_task(self, request: TaskCreateRequest) -> Task:
        """创建任务并投递给 Worker

        Returns:
            已分配 id 的 Task

        Raises:
            StorageError: 写入失败（此时任务不会入队）
        """
        task = Task(
            title=request.title,
            description=request.description,
            status=TaskStatus.PENDING,
            created_at=datetime.now(UTC),
        )
        task.id = await self._store.insert(task)
        log.info("task_created", task_id=task.id, title=task.title)

        await self._channel.put(task)
        log.info("task_dispatched", task_id=task.id, queue_size=self._channel.qsize())

        return task


async def list_tasks(store: TaskStore) -> list[Task]:
    """查询全部任务（只读，不涉及分发通道）"""
    return await store.list_all()
