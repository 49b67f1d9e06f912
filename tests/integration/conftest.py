"""集成测试共享 fixture

通过真实 lifespan 启动整条流水线（Store + 分发通道 + Worker），
数据库与处理时长由环境变量指定。
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# 集成测试用模拟处理时长（秒）
INTEGRATION_DELAY_S = 0.5


@pytest_asyncio.fixture
async def integration_app(tmp_path: Path, monkeypatch):
    """集成测试用 FastAPI app（lifespan 已进入）"""
    monkeypatch.setenv("TASKRELAY_DB_PATH", str(tmp_path / "sqlite" / "e2e.db"))
    monkeypatch.setenv("TASKRELAY_PROCESSING_DELAY_S", str(INTEGRATION_DELAY_S))

    from taskrelay.gateway.main import create_app

    app = create_app()
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac
