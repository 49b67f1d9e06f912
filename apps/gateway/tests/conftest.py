"""apps/gateway 测试配置 -- FastAPI app + httpx AsyncClient fixture

ASGITransport 不触发 lifespan，这里手动初始化 app.state（Store / 通道 / Worker），
并把模拟处理时长缩短到毫秒级。
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from taskrelay.core.store import create_store_group

# 测试用模拟处理时长（秒）
TEST_PROCESSING_DELAY_S = 0.5


@pytest_asyncio.fixture
async def test_app(tmp_db_path: Path):
    """创建测试用 FastAPI app，手动初始化 lifespan 状态并启动 Worker"""
    from taskrelay.gateway.main import create_app
    from taskrelay.gateway.services.dispatch import TaskChannel
    from taskrelay.gateway.services.worker import TaskWorker

    app = create_app()

    store_group = await create_store_group(str(tmp_db_path))
    task_channel = TaskChannel()
    worker = TaskWorker(
        store=store_group.task_store,
        channel=task_channel,
        processing_delay_s=TEST_PROCESSING_DELAY_S,
    )
    worker.start()

    app.state.store_group = store_group
    app.state.task_channel = task_channel
    app.state.worker = worker

    yield app

    await worker.stop()
    await store_group.close()


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac
