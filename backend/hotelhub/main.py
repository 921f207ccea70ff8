"""
HotelHub 主应用入口
酒店资料录入向导的后端：一次提交写入酒店 / 房间配置 / 活动 / 餐饮的全部子资源
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from hotelhub import __version__
from hotelhub.config import settings
from hotelhub.database import init_db
from hotelhub.errors import CompositionError
from hotelhub.logging_config import setup_logging
from hotelhub.routers import hotels, fnb, rooms, events

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 启动时执行
    setup_logging(settings.LOG_LEVEL)
    init_db()
    logger.info("%s 启动完成", settings.APP_NAME)

    yield


# 创建应用
app = FastAPI(
    title=settings.APP_NAME,
    description="酒店资料录入后端：聚合写入酒店、房间配置、活动与餐饮信息",
    version=__version__,
    debug=settings.DEBUG,
    lifespan=lifespan
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CompositionError)
async def composition_error_handler(request: Request, exc: CompositionError):
    """组合写入异常 -> 统一错误响应"""
    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.kind.value, exc.message)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.kind.value, exc.message)
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


# 注册路由
app.include_router(hotels.router, prefix="/api")
app.include_router(fnb.router, prefix="/api")
app.include_router(rooms.router, prefix="/api")
app.include_router(events.router, prefix="/api")


@app.get("/")
def root():
    """根路径"""
    return {
        "name": settings.APP_NAME,
        "version": __version__,
    }


@app.get("/health")
def health_check():
    """健康检查"""
    return {"status": "healthy"}
