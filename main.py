import logging
import os
import sys

import uvicorn

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "src")))

from shared.config import get_section, load_config  # noqa: E402

logger = logging.getLogger(__name__)


def main():
    # 配置日志记录
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )

    config = load_config()
    api_config = get_section(config, "api")

    uvicorn.run(
        "api.main:app",
        host=api_config.get("host", "0.0.0.0"),
        port=api_config.get("port", 8000),
        log_level="info",
        ssl_keyfile=api_config.get("ssl_key_path", None)
        if api_config.get("enable_ssl", False)
        else None,
        ssl_certfile=api_config.get("ssl_cert_path", None)
        if api_config.get("enable_ssl", False)
        else None,
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("服务关闭。")
