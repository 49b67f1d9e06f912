"""FastAPI 应用主文件

app 创建 + lifespan 管理：Store 打开/关闭 + 分发通道 + Worker 启停 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from starlette.responses import JSONResponse
from taskrelay.core.config import get_db_path, load_pipeline_config
from taskrelay.core.errors import StorageError, TaskValidationError
from taskrelay.core.store import create_store_group

from .middleware.logging_config import setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .routes import health, tasks
from .services.dispatch import TaskChannel
from .services.worker import TaskWorker

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理

    启动：打开 Store（失败即终止进程）、创建分发通道、启动唯一的 Worker。
    关闭：取消 Worker（不排空队列）、关闭数据库连接。
    """
    pipeline_config = load_pipeline_config()
    app.state.pipeline_config = pipeline_config

    # StorageError 直接向上抛出，uvicorn 启动失败退出
    store_group = await create_store_group(get_db_path())
    app.state.store_group = store_group

    task_channel = TaskChannel(maxsize=pipeline_config.queue_maxsize)
    app.state.task_channel = task_channel

    worker = TaskWorker(
        store=store_group.task_store,
        channel=task_channel,
        processing_delay_s=pipeline_config.processing_delay_s,
    )
    worker.start()
    app.state.worker = worker

    yield

    await worker.stop()
    await store_group.close()


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="TaskRelay Gateway",
        version="0.1.0",
        description="任务提交 + 后台异步完成",
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)

    setup_logging()

    @app.exception_handler(TaskValidationError)
    async def task_validation_error_handler(request: Request, exc: TaskValidationError):
        log.info("task_payload_rejected", reason=exc.message)
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        log.error(
            "storage_error",
            operation=exc.operation,
            error_type=type(exc.original_error).__name__ if exc.original_error else None,
        )
        # 不向客户端暴露底层数据库错误细节
        return _error_response(500, exc.code, "Storage operation failed, try again later")

    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
