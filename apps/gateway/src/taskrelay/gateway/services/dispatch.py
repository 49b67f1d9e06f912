"""TaskChannel -- 请求处理与 Worker 之间的内存分发通道

基于 asyncio.Queue 的 FIFO 队列：多个请求协程写入，单个 Worker 消费。
默认无界（maxsize=0），put 不会因容量阻塞。

注意：通道不做持久化，进程退出时队列中未处理的任务丢失（Store 中保持 PENDING）。
若配置了 maxsize 且 Worker 已退出，队列写满后 put 将永久挂起。
"""

import asyncio

from taskrelay.core.models import Task


class TaskChannel:
    """任务分发通道 -- 入队顺序即出队顺序，无优先级、无去重"""

    def __init__(self, maxsize: int = 0) -> None:
        self._queue: asyncio.Queue[Task] = asyncio.Queue(maxsize=maxsize)

    @property
    def maxsize(self) -> int:
        """通道容量，0 表示无界"""
        return self._queue.maxsize

    async def put(self, task: Task) -> None:
        """入队；有界且已满时挂起直到 Worker 取走任务"""
        await self._queue.put(task)

    async def get(self) -> Task:
        """出队；通道为空时挂起"""
        return await self._queue.get()

    def qsize(self) -> int:
        return self._queue.qsize()

    def empty(self) -> bool:
        return self._queue.empty()
