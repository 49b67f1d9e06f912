"""全局 pytest 配置 -- 临时 SQLite 数据库路径 fixture"""

from pathlib import Path

import pytest_asyncio


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径（父目录尚不存在，由 create_store_group 创建）"""
    return tmp_path / "sqlite" / "test.db"
