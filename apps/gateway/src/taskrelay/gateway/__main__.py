"""服务入口 -- python -m taskrelay.gateway

监听地址/端口由 TASKRELAY_HOST / TASKRELAY_PORT 控制。
"""

import uvicorn
from taskrelay.core.config import load_pipeline_config


def main() -> None:
    config = load_pipeline_config()
    uvicorn.run(
        "taskrelay.gateway.main:app",
        host=config.host,
        port=config.port,
        log_config=None,  # 日志由 setup_logging 统一配置
    )


if __name__ == "__main__":
    main()
