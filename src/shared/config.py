import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_DB_URL = "sqlite+aiosqlite:///data/pawshare.db"


def load_config(path: str | None = None) -> Dict[str, Any]:
    """
    读取 config.json。

    文件路径可通过 PAWSHARE_CONFIG 环境变量覆盖，
    DATABASE_URL 环境变量优先于文件中的 db_url。
    文件不存在时返回空配置，各模块使用自己的默认值。
    """
    config_path = path or os.environ.get("PAWSHARE_CONFIG", DEFAULT_CONFIG_PATH)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError:
        logger.warning(f"未找到配置文件 {config_path}，使用默认配置")
        config = {}

    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        config["db_url"] = env_db_url

    return config


def get_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name, {})
    return section if isinstance(section, dict) else {}
