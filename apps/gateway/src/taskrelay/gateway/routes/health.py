"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，包含 SQLite 连通性与 Worker 运行状态。
"""

import structlog
from fastapi import APIRouter, Depends, Request
from starlette.responses import JSONResponse

from ..deps import get_worker

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request, worker=Depends(get_worker)):
    """Readiness 检查 -- 验证核心依赖可用性

    检查项：
    1. sqlite: 数据库连通性
    2. worker: 后台 Worker 是否仍在运行（Worker 退出后不会重启）
    另附 queue_size、wal_enabled 与 worker 统计信息。
    """
    checks: dict = {}
    all_ok = True
    store_group = getattr(request.app.state, "store_group", None)

    # 1. SQLite 连通性检查
    try:
        cursor = await store_group.conn.execute("SELECT 1")
        await cursor.fetchone()
        checks["sqlite"] = "ok"
    except Exception as e:
        log.warning("ready_check_failed", check="sqlite", error_type=type(e).__name__)
        checks["sqlite"] = f"error: {type(e).__name__}"
        all_ok = False

    # 2. Worker 运行状态
    if worker is not None and worker.is_running:
        checks["worker"] = "ok"
    else:
        checks["worker"] = "stopped"
        all_ok = False

    task_channel = getattr(request.app.state, "task_channel", None)
    content = {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
        "queue_size": task_channel.qsize() if task_channel is not None else 0,
        "wal_enabled": getattr(store_group, "wal_enabled", False),
        "worker_stats": worker.stats.model_dump() if worker is not None else None,
    }

    return JSONResponse(status_code=200 if all_ok else 503, content=content)
