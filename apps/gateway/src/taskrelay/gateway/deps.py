"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store / 分发通道 / Worker

实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Request
from taskrelay.core.store import StoreGroup

from .services.dispatch import TaskChannel
from .services.worker import TaskWorker


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_task_channel(request: Request) -> TaskChannel:
    """从 app.state 获取 TaskChannel 实例"""
    return request.app.state.task_channel


def get_worker(request: Request) -> TaskWorker | None:
    """从 app.state 获取 TaskWorker 实例（未初始化时为 None）"""
    return getattr(request.app.state, "worker", None)
