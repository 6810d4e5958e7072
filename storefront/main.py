"""
Главный модуль FastAPI приложения Sneaker Storefront API.

Содержит конфигурацию приложения, middleware и роутеры.
Локальное хранилище изображений раздается по /static.
"""

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from storefront.api.v1.routers import api_router
from storefront.core.config import settings
from storefront.core.errors import register_exception_handlers
from storefront.core.logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

# Создание экземпляра FastAPI приложения
app = FastAPI(
    title="Sneaker Storefront API",
    description="API витрины обуви с фильтрами, заказом через WhatsApp и панелью администратора",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Подключение статических файлов для локального хранилища
if settings.STORAGE_TYPE == "local":
    uploads_path = Path(settings.STORAGE_PATH).resolve()
    uploads_path.mkdir(parents=True, exist_ok=True)
    app.mount("/static", StaticFiles(directory=str(uploads_path)), name="static")
    logger.info("Static files mounted at /static from directory: %s", uploads_path)

# Настройка CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/healthz")
def healthz():
    """
    Health check endpoint для мониторинга состояния приложения.

    Returns:
        dict: Статус приложения
    """
    return {"status": "ok", "service": "Sneaker Storefront API", "version": "1.0.0"}


# Подключение API роутеров
app.include_router(api_router, prefix="/api/v1")
