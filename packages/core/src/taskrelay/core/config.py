"""配置模块 -- 可通过环境变量覆盖

包含数据库路径，以及分发通道 / Worker / 服务监听地址等流水线参数。
"""

import math
import os
from pathlib import Path

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

# 默认模拟处理时长（秒）
DEFAULT_PROCESSING_DELAY_S: float = 5.0

# 默认监听端口
DEFAULT_PORT: int = 8081


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKRELAY_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKRELAY_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskrelay.db"),
    )


class PipelineConfig(BaseModel):
    """任务流水线配置 -- 从环境变量加载

    环境变量:
        TASKRELAY_PROCESSING_DELAY_S: 模拟处理时长（秒，默认 5）
        TASKRELAY_QUEUE_MAXSIZE: 分发通道容量（默认 0，即无界）
        TASKRELAY_HOST: 监听地址（默认 0.0.0.0）
        TASKRELAY_PORT: 监听端口（默认 8081）
    """

    processing_delay_s: float = Field(
        default=DEFAULT_PROCESSING_DELAY_S,
        ge=0,
        allow_inf_nan=False,
        description="Worker 每个任务的模拟处理时长（秒）",
    )
    queue_maxsize: int = Field(
        default=0,
        ge=0,
        description="分发通道容量，0 表示无界",
    )
    host: str = Field(default="0.0.0.0", description="HTTP 监听地址")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="HTTP 监听端口")


def _read_number(env_var: str, cast, fallback, minimum=0, maximum=None):
    """读取数值型环境变量

    无法解析、非有限值（inf / nan）或超出 [minimum, maximum] 的值
    记录 warning 并返回 None（使用默认值）。
    """
    val = os.environ.get(env_var)
    if not val:
        return None
    try:
        number = cast(val)
    except ValueError:
        number = None

    if (
        number is None
        or not math.isfinite(number)
        or number < minimum
        or (maximum is not None and number > maximum)
    ):
        log.warning(
            "invalid_pipeline_config",
            env_var=env_var,
            value=val,
            fallback=fallback,
        )
        return None
    return number


def load_pipeline_config() -> PipelineConfig:
    """从环境变量加载流水线配置

    非法数值不阻塞启动，回退到默认值。

    Returns:
        PipelineConfig 实例
    """
    kwargs: dict = {}

    delay = _read_number(
        "TASKRELAY_PROCESSING_DELAY_S", float, DEFAULT_PROCESSING_DELAY_S
    )
    if delay is not None:
        kwargs["processing_delay_s"] = delay

    maxsize = _read_number("TASKRELAY_QUEUE_MAXSIZE", int, 0)
    if maxsize is not None:
        kwargs["queue_maxsize"] = maxsize

    if val := os.environ.get("TASKRELAY_HOST"):
        kwargs["host"] = val

    port = _read_number("TASKRELAY_PORT", int, DEFAULT_PORT, minimum=1, maximum=65535)
    if port is not None:
        kwargs["port"] = port

    return PipelineConfig(**kwargs)
