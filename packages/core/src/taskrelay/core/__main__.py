"""CLI 入口模块 -- python -m taskrelay.core <command>

支持的命令：
  init-db     创建数据库文件与 tasks 表
  list-tasks  以 JSON Lines 输出全部任务
"""

import asyncio
import sys

from .config import get_db_path
from .errors import StorageError

_USAGE = """用法: python -m taskrelay.core <command>
命令:
  init-db     创建数据库文件与 tasks 表
  list-tasks  以 JSON Lines 输出全部任务"""


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print(_USAGE)
        sys.exit(1)

    command = sys.argv[1]

    try:
        if command == "init-db":
            asyncio.run(init_database())
        elif command == "list-tasks":
            asyncio.run(list_tasks())
        else:
            print(f"未知命令: {command}")
            print("可用命令: init-db, list-tasks")
            sys.exit(1)
    except StorageError as e:
        print(f"存储错误: {e}", file=sys.stderr)
        sys.exit(2)


async def init_database() -> None:
    """创建数据库（create_store_group 会执行建表）"""
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    await store_group.close()
    print("初始化完成")


async def list_tasks() -> None:
    """逐行输出任务 JSON"""
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())
    try:
        tasks = await store_group.task_store.list_all()
    finally:
        await store_group.close()

    for task in tasks:
        print(task.model_dump_json())


if __name__ == "__main__":
    main()
