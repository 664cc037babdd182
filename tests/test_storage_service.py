import httpx
import pytest

from shared.errors import StorageError
from storage.storage_service import StorageService, configure_storage


@pytest.mark.asyncio
async def test_put_posts_multipart_to_gateway():
    """测试上传请求的地址、参数和认证头"""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        seen["path"] = request.url.params["path"]
        seen["auth"] = request.headers.get("Authorization")
        seen["content_type"] = request.headers.get("Content-Type")
        seen["body"] = request.content
        return httpx.Response(200, json={"url": "https://cdn.test/dogs/rex.jpg"})

    service = StorageService(
        "https://storage.test/", api_key="k", transport=httpx.MockTransport(handler)
    )
    stored = await service.put("/dogs/rex.jpg", b"woof", "image/jpeg")

    assert stored.url == "https://cdn.test/dogs/rex.jpg"
    assert stored.key == "dogs/rex.jpg"
    assert seen["url"] == "https://storage.test/v1/storage/upload"
    assert seen["path"] == "dogs/rex.jpg"
    assert seen["auth"] == "Bearer k"
    assert seen["content_type"].startswith("multipart/form-data")
    assert b"woof" in seen["body"]


@pytest.mark.asyncio
async def test_put_without_api_key_sends_no_auth():
    def handler(request: httpx.Request) -> httpx.Response:
        assert "Authorization" not in request.headers
        return httpx.Response(200, json={"url": "https://cdn.test/x"})

    service = StorageService("https://storage.test", transport=httpx.MockTransport(handler))
    stored = await service.put("x", b"1", "image/jpeg")
    assert stored.url == "https://cdn.test/x"


@pytest.mark.asyncio
async def test_put_error_status_raises():
    service = StorageService(
        "https://storage.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(503, text="down")),
    )
    with pytest.raises(StorageError) as exc_info:
        await service.put("x", b"1", "image/jpeg")
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_put_missing_url_raises():
    service = StorageService(
        "https://storage.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
    )
    with pytest.raises(StorageError):
        await service.put("x", b"1", "image/jpeg")


@pytest.mark.asyncio
async def test_put_non_json_response_raises():
    """网关返回 2xx 但响应不是 JSON 时报上传失败"""
    service = StorageService(
        "https://storage.test",
        transport=httpx.MockTransport(
            lambda request: httpx.Response(200, text="<html>ok</html>")
        ),
    )
    with pytest.raises(StorageError) as exc_info:
        await service.put("x", b"1", "image/jpeg")
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_put_json_array_response_raises():
    service = StorageService(
        "https://storage.test",
        transport=httpx.MockTransport(
            lambda request: httpx.Response(200, json=["https://cdn.test/x"])
        ),
    )
    with pytest.raises(StorageError):
        await service.put("x", b"1", "image/jpeg")


@pytest.mark.asyncio
async def test_put_transport_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    service = StorageService("https://storage.test", transport=httpx.MockTransport(handler))
    with pytest.raises(StorageError):
        await service.put("x", b"1", "image/jpeg")


def test_configure_storage():
    """未配置 base_url 时不创建客户端"""
    assert configure_storage({}) is None

    service = configure_storage(
        {"storage": {"base_url": "https://storage.test", "api_key": "k"}}
    )
    assert service is not None
    assert service.base_url == "https://storage.test"
    assert service.api_key == "k"
    configure_storage({})
