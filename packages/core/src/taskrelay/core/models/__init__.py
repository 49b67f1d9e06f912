"""TaskRelay Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    TaskStatus,
    validate_transition,
)
from .task import Task, TaskCreateRequest

__all__ = [
    # 枚举
    "TaskStatus",
    # 状态机
    "VALID_TRANSITIONS",
    "TERMINAL_STATES",
    "validate_transition",
    # Task
    "Task",
    "TaskCreateRequest",
]
