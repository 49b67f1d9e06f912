"""TaskRelay Core Store -- SQLite 持久化实现

提供工厂函数打开数据库并创建共享连接的 Store 实例组。
"""

from pathlib import Path

import aiosqlite
import structlog

from ..errors import StorageError
from .protocols import TaskStore
from .sqlite_init import init_db, verify_wal_mode
from .task_store import SqliteTaskStore

log = structlog.get_logger()


class StoreGroup:
    """Store 实例组 -- 持有数据库连接与 TaskStore"""

    def __init__(self, conn: aiosqlite.Connection, wal_enabled: bool = False) -> None:
        self.conn = conn
        self.wal_enabled = wal_enabled
        self.task_store = SqliteTaskStore(conn)

    async def close(self) -> None:
        await self.conn.close()


async def create_store_group(db_path: str) -> StoreGroup:
    """打开数据库并创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        StoreGroup 实例

    Raises:
        StorageError: 数据库目录不可创建或数据库无法打开/初始化
    """
    try:
        # 确保数据库目录存在
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        conn = await aiosqlite.connect(db_path)
    except (OSError, aiosqlite.Error) as e:
        log.error("store_open_failed", db_path=db_path, error_type=type(e).__name__)
        raise StorageError("open", e) from e

    try:
        await init_db(conn)
        wal_enabled = await verify_wal_mode(conn)
    except aiosqlite.Error as e:
        await conn.close()
        log.error("store_open_failed", db_path=db_path, error_type=type(e).__name__)
        raise StorageError("open", e) from e

    if not wal_enabled:
        # 内存库等场景不支持 WAL
        log.warning("store_wal_unavailable", db_path=db_path)

    log.info("store_opened", db_path=db_path, wal_enabled=wal_enabled)
    return StoreGroup(conn=conn, wal_enabled=wal_enabled)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "SqliteTaskStore",
    "TaskStore",
    "init_db",
]
