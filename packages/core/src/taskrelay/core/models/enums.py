"""枚举定义

TaskStatus 状态机，以及 VALID_TRANSITIONS 合法流转映射和 TERMINAL_STATES 终态集合。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Task 状态机：PENDING -> COMPLETED，仅由 Worker 推进一次"""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


VALID_TRANSITIONS: dict[TaskStatus, set[TaskStatus]] = {
    TaskStatus.PENDING: {TaskStatus.COMPLETED},
    # 终态不可再流转
    TaskStatus.COMPLETED: set(),
}

TERMINAL_STATES: set[TaskStatus] = {
    TaskStatus.COMPLETED,
}


def validate_transition(from_status: TaskStatus, to_status: TaskStatus) -> bool:
    """验证状态流转是否合法

    Args:
        from_status: 当前状态
        to_status: 目标状态

    Returns:
        True 如果流转合法，否则 False
    """
    allowed = VALID_TRANSITIONS.get(from_status, set())
    return to_status in allowed
