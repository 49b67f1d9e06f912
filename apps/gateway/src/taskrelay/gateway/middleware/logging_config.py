"""structlog 配置模块

dev 模式：pretty print 可读输出
json 模式：结构化 JSON 输出

gateway 以 log_config=None 启动 uvicorn，uvicorn 自身的 logger 统一交给
根 handler 渲染；请求日志由 LoggingMiddleware 的 request_completed 负责，
因此 uvicorn.access 被压到 WARNING。
"""

import logging
import os

import structlog

# logger 名 -> 最低级别
_QUIETED_LOGGERS: dict[str, int] = {
    "uvicorn.access": logging.WARNING,
    "aiosqlite": logging.INFO,
}

# 自带 handler 的 uvicorn logger，改为向根 logger 传播
_PROPAGATED_LOGGERS = ("uvicorn", "uvicorn.error")


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """初始化 structlog 配置

    参数为空时读取环境变量：
    - TASKRELAY_LOG_FORMAT: "json" 结构化输出 / "dev"（默认）可读输出
    - TASKRELAY_LOG_LEVEL: 根 logger 级别（默认 INFO）
    """
    log_format = log_format or os.environ.get("TASKRELAY_LOG_FORMAT", "dev")
    log_level = log_level or os.environ.get("TASKRELAY_LOG_LEVEL", "INFO")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in _PROPAGATED_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    for name, level in _QUIETED_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
