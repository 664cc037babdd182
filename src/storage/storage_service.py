"""对象存储客户端：上传字节并返回公开 URL 与 key"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from shared.config import get_section
from shared.errors import StorageError

logger = logging.getLogger(__name__)


@dataclass
class StoredObject:
    url: str
    key: str


class StorageService:
    """
    通过存储网关上传文件。

    网关接口: POST {base_url}/v1/storage/upload?path=<key>
    以 multipart 方式提交文件内容，返回 JSON {"url": ...}。
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.transport = transport
        self.timeout = timeout

    async def put(self, key: str, data: bytes, content_type: str) -> StoredObject:
        key = key.lstrip("/")
        headers = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        files = {"file": (key.rsplit("/", 1)[-1], data, content_type)}

        async with httpx.AsyncClient(
            transport=self.transport, timeout=self.timeout
        ) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/v1/storage/upload",
                    params={"path": key},
                    files=files,
                    headers=headers,
                )
            except httpx.HTTPError as e:
                logger.error(f"上传 {key} 时请求存储网关失败: {e}")
                raise StorageError(f"Storage upload failed: {e}") from e

        if response.status_code >= 400:
            logger.error(
                f"上传 {key} 失败 - 状态码: {response.status_code}, 响应: {response.text}"
            )
            raise StorageError(
                f"Storage upload failed ({response.status_code})"
            )

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"上传 {key} 后存储网关返回了无法解析的响应: {response.text[:200]}")
            raise StorageError("Storage upload returned invalid JSON") from e
        if not isinstance(body, dict):
            raise StorageError("Storage upload returned invalid JSON")

        url = body.get("url")
        if not url:
            raise StorageError("Storage upload returned no url")

        logger.info(f"已上传 {key} ({len(data)} bytes)")
        return StoredObject(url=url, key=key)


_storage_service: Optional[StorageService] = None


def configure_storage(
    config: Dict[str, Any], transport: Optional[httpx.AsyncBaseTransport] = None
) -> Optional[StorageService]:
    """
    由 main 在启动时调用，按配置创建存储客户端。
    """
    global _storage_service
    storage_config = get_section(config, "storage")
    base_url = storage_config.get("base_url")
    if not base_url:
        logger.warning("存储配置 (storage.base_url) 未配置，图片上传不可用")
        _storage_service = None
        return None

    _storage_service = StorageService(
        base_url=base_url,
        api_key=storage_config.get("api_key"),
        transport=transport,
    )
    return _storage_service


def set_storage_service(service: Optional[StorageService]) -> None:
    global _storage_service
    _storage_service = service


def current_storage() -> Optional[StorageService]:
    """FastAPI 依赖：未配置存储时返回 None，由业务层在需要上传时报错。"""
    return _storage_service
