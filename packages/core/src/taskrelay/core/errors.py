"""TaskRelay 异常体系

- TaskValidationError: 请求体形状非法（HTTP 400）
- StorageError: 插入/更新/查询/打开存储失败（HTTP 500）
"""


class TaskRelayError(Exception):
    """TaskRelay 基础异常"""

    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TaskValidationError(TaskRelayError):
    """任务请求体非法（JSON 格式错误、缺少 title 等）"""

    code = "INVALID_TASK_PAYLOAD"


class StorageError(TaskRelayError):
    """存储层读写失败

    包装底层 aiosqlite 异常或行解码异常。
    """

    code = "STORAGE_ERROR"

    def __init__(self, operation: str, original_error: Exception | None = None) -> None:
        """
        Args:
            operation: 失败的存储操作（insert / update_status / list_all / open）
            original_error: 原始异常
        """
        detail = f": {original_error}" if original_error is not None else ""
        super().__init__(f"Storage operation '{operation}' failed{detail}")
        self.operation = operation
        self.original_error = original_error
