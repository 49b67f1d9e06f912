"""任务路由

POST /tasks: 创建任务（201，无响应体），异步交给 Worker 完成。
GET /tasks: 返回全部任务。
其他方法由 FastAPI 路由返回 405。

TaskValidationError / StorageError 由 main.py 中注册的异常处理器转换为 400 / 500。
"""

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from starlette.responses import Response

from ..deps import get_store_group, get_task_channel
from ..services.task_service import TaskService, parse_create_request
from ..services.task_service import list_tasks as list_all_tasks

router = APIRouter()


class TaskItem(BaseModel):
    """任务列表项"""

    id: int
    title: str
    description: str
    status: str
    created_at: str


@router.post("/tasks", status_code=201)
async def create_task(
    request: Request,
    store_group=Depends(get_store_group),
    task_channel=Depends(get_task_channel),
):
    """创建任务

    请求体中的 id / status / created_at 被忽略。
    """
    body = await request.body()
    create_request = parse_create_request(body)

    service = TaskService(store_group.task_store, task_channel)
    await service.create_task(create_request)

    return Response(status_code=201)


@router.get("/tasks", response_model=list[TaskItem])
async def list_tasks(store_group=Depends(get_store_group)):
    """查询全部任务（存储原生顺序）"""
    tasks = await list_all_tasks(store_group.task_store)

    return [
        TaskItem(
            id=t.id,
            title=t.title,
            description=t.description,
            status=t.status.value,
            created_at=t.created_at.isoformat(),
        )
        for t in tasks
    ]
