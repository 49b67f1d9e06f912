"""TaskStore SQLite 实现

同一连接被多个请求协程与 Worker 共享，所有操作由内部 asyncio.Lock 串行化：
写操作（execute + commit）失败时回滚并抛出 StorageError；读操作不会看到
其他协程尚未提交的写入。
"""

import asyncio
from datetime import datetime

import aiosqlite
import structlog
from pydantic import ValidationError

from ..errors import StorageError
from ..models.enums import TaskStatus
from ..models.task import Task

log = structlog.get_logger()


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn
        self._lock = asyncio.Lock()

    async def insert(self, task: Task) -> int:
        """插入新任务，返回 Store 生成的 id"""
        async with self._lock:
            try:
                cursor = await self._conn.execute(
                    """
                    INSERT INTO tasks (title, description, status, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (
                        task.title,
                        task.description,
                        task.status.value,
                        task.created_at.isoformat(),
                    ),
                )
                task_id = cursor.lastrowid
                await self._conn.commit()
            except (aiosqlite.Error, ValueError) as e:
                await self._safe_rollback()
                raise StorageError("insert", e) from e
        return task_id

    async def update_status(self, task_id: int, status: TaskStatus) -> None:
        """更新任务状态；id 不存在（影响 0 行）不视为错误"""
        async with self._lock:
            try:
                await self._conn.execute(
                    "UPDATE tasks SET status = ? WHERE id = ?",
                    (status.value, task_id),
                )
                await self._conn.commit()
            except (aiosqlite.Error, ValueError) as e:
                await self._safe_rollback()
                raise StorageError("update_status", e) from e

    async def list_all(self) -> list[Task]:
        """查询全部任务，按存储原生顺序返回

        任一行解码失败即整体失败，不返回部分结果。
        """
        async with self._lock:
            try:
                cursor = await self._conn.execute(
                    "SELECT id, title, description, status, created_at FROM tasks"
                )
                rows = await cursor.fetchall()
            except (aiosqlite.Error, ValueError) as e:
                raise StorageError("list_all", e) from e

        try:
            return [self._row_to_task(row) for row in rows]
        except (ValidationError, ValueError, TypeError) as e:
            raise StorageError("list_all", e) from e

    async def _safe_rollback(self) -> None:
        try:
            await self._conn.rollback()
        except (aiosqlite.Error, ValueError) as e:
            # 连接已不可用时回滚同样会失败，原始错误由调用方抛出
            log.warning("store_rollback_failed", error_type=type(e).__name__)

    @staticmethod
    def _row_to_task(row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            id=row[0],
            title=row[1],
            description=row[2],
            status=row[3],
            created_at=datetime.fromisoformat(row[4]),
        )
