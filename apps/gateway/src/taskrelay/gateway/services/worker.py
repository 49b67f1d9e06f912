"""TaskWorker -- 单个后台处理循环

生命周期：应用启动时 start() 一次，随进程运行，不重启；关闭时 stop() 直接取消，
不保证排空队列。

处理流程：
1. 从 TaskChannel 取出任务（为空时挂起）
2. 固定时长模拟处理
3. 内存中置为 COMPLETED
4. Store.update_status(id, COMPLETED)
5. 记录完成日志

状态更新失败只尝试一次：记录 error 日志并计入 WorkerStats，不重试、不回队，
Store 中该任务保持 PENDING。
"""

import asyncio

import structlog
from pydantic import BaseModel, Field
from taskrelay.core.config import DEFAULT_PROCESSING_DELAY_S
from taskrelay.core.errors import StorageError
from taskrelay.core.models import Task, TaskStatus, validate_transition
from taskrelay.core.store import TaskStore

from .dispatch import TaskChannel

log = structlog.get_logger()


class WorkerStats(BaseModel):
    """Worker 运行统计，供 /ready 与测试观测"""

    processed: int = Field(default=0, description="状态已成功更新的任务数")
    update_failures: int = Field(default=0, description="状态更新失败（已丢弃）的任务数")
    last_failed_task_id: int | None = Field(default=None, description="最近一次更新失败的任务 ID")
    last_error: str | None = Field(default=None, description="最近一次更新失败的错误类型")


class TaskWorker:
    """后台任务处理器"""

    def __init__(
        self,
        store: TaskStore,
        channel: TaskChannel,
        processing_delay_s: float = DEFAULT_PROCESSING_DELAY_S,
    ) -> None:
        self._store = store
        self._channel = channel
        self._processing_delay_s = processing_delay_s
        self._runner: asyncio.Task | None = None
        self.stats = WorkerStats()

    @property
    def is_running(self) -> bool:
        return self._runner is not None and not self._runner.done()

    def start(self) -> None:
        """启动处理循环（仅允许一次）

        Raises:
            RuntimeError: 已经启动过（无论当前是否仍在运行）
        """
        if self._runner is not None:
            raise RuntimeError("TaskWorker can only be started once")
        self._runner = asyncio.create_task(self._run(), name="taskrelay-worker")
        log.info(
            "worker_started",
            processing_delay_s=self._processing_delay_s,
            queue_maxsize=self._channel.maxsize,
        )

    async def stop(self) -> None:
        """取消处理循环；队列中剩余任务被丢弃"""
        if self._runner is None or self._runner.done():
            return
        self._runner.cancel()
        try:
            await self._runner
        except asyncio.CancelledError:
            pass
        log.info("worker_stopped", abandoned=self._channel.qsize())

    async def _run(self) -> None:
        try:
            while True:
                task = await self._channel.get()
                with structlog.contextvars.bound_contextvars(task_id=task.id):
                    await self.process(task)
        except asyncio.CancelledError:
            raise
        except Exception:
            # Worker 不重启；/ready 将报告 not_ready
            log.exception("worker_crashed", pending=self._channel.qsize())
            raise

    async def process(self, task: Task) -> None:
        """处理单个任务：模拟耗时 + 推进到 COMPLETED"""
        log.info("task_processing_started", title=task.title)
        await asyncio.sleep(self._processing_delay_s)

        if not validate_transition(task.status, TaskStatus.COMPLETED):
            log.warning("task_transition_skipped", status=task.status.value)
            return

        task.status = TaskStatus.COMPLETED
        try:
            await self._store.update_status(task.id, TaskStatus.COMPLETED)
        except StorageError as e:
            self.stats.update_failures += 1
            self.stats.last_failed_task_id = task.id
            self.stats.last_error = type(e.original_error or e).__name__
            log.error(
                "task_status_update_failed",
                error_type=self.stats.last_error,
                retry=False,
            )
            return

        self.stats.processed += 1
        log.info("task_processed", title=task.title)
