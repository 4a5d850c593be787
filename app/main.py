import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.config import get_settings
from app.database import init_db
from app.routers import schedule_templates_router, weekly_schedules_router
from app.routers.errors import register_exception_handlers

# 取得設定
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """應用程式生命週期管理"""
    # 啟動時：初始化資料庫
    logger.info("Initializing database...")
    init_db()
    logger.info("Database ready")

    yield

    logger.info("Shutting down")


# 建立 FastAPI 應用程式
app = FastAPI(
    title=settings.app_name,
    description="員工班表範本、每週排班指定與實際班表查詢",
    version="1.0.0",
    lifespan=lifespan,
)

# 設定 CORS（跨域請求）
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 生產環境應該限制來源
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 領域例外 → HTTP 狀態碼
register_exception_handlers(app)

# 註冊路由
app.include_router(schedule_templates_router)
app.include_router(weekly_schedules_router)


@app.get("/health")
async def health():
    """健康檢查端點"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
