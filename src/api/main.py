import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_section, load_config
from shared.errors import DatabaseUnavailableError, ServiceError

from .v1.routers import auth, comments, likes, posts, search, tags, user

logger = logging.getLogger(__name__)

config = load_config()
api_config = get_section(config, "api")
enable_docs = api_config.get("enable_docs", True)
cors_origins = api_config.get("cors_origins") or ["*"]

docs_url = "/docs" if enable_docs else None
redoc_url = "/redoc" if enable_docs else None

app = FastAPI(
    title="PawShare API",
    description="PawShare 狗狗社区 API 服务",
    version="1.0.0",
    docs_url=docs_url,
    redoc_url=redoc_url,
    openapi_tags=[
        {"name": "系统", "description": "系统相关接口"},
        {"name": "认证", "description": "注册、登录与会话"},
        {"name": "用户", "description": "用户资料"},
        {"name": "帖子", "description": "帖子的发布与管理"},
        {"name": "评论", "description": "帖子评论"},
        {"name": "点赞", "description": "帖子点赞"},
        {"name": "标签", "description": "标签列表与按标签浏览"},
        {"name": "搜索", "description": "帖子搜索"},
    ],
)

# 会话依赖 Cookie，只有明确列出的来源才允许携带凭据
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
    max_age=600,
)

app.add_middleware(GZipMiddleware, minimum_size=1000)

# 包含路由
app.include_router(auth.router, prefix="/v1")
app.include_router(user.router, prefix="/v1")
app.include_router(posts.router, prefix="/v1")
app.include_router(comments.router, prefix="/v1")
app.include_router(likes.router, prefix="/v1")
app.include_router(tags.router, prefix="/v1")
app.include_router(search.router, prefix="/v1")


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """将业务错误转换为带状态码的 JSON 响应"""
    logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/v1/health", summary="健康检查", tags=["系统"])
async def health_check():
    """API 服务健康检查端点"""
    return {"status": "ok"}


@app.get("/", summary="服务信息", tags=["系统"])
async def index():
    return {
        "name": app.title,
        "version": app.version,
        "docs": docs_url,
        "routers": sorted(
            {route.path.split("/")[2] for route in app.routes if route.path.startswith("/v1/")}
        ),
    }


@app.on_event("startup")
async def startup_event():
    """应用启动时初始化会话签名、对象存储和数据库"""
    from shared.config import DEFAULT_DB_URL
    from shared.database import configure_database, init_db
    from storage.storage_service import configure_storage

    from .v1.dependencies.security import initialize_api_security

    initialize_api_security(config)
    configure_storage(config)
    configure_database(config.get("db_url", DEFAULT_DB_URL))
    try:
        await init_db()
    except DatabaseUnavailableError as e:
        logger.warning(f"数据库不可用，服务继续启动，数据接口将返回 503: {e.message}")


@app.on_event("shutdown")
async def shutdown_event():
    from shared.database import close_db

    await close_db()
