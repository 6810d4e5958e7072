"""
Исключения предметной области и их обработчики для FastAPI.

Сервисы поднимают эти исключения, а приложение переводит их
в HTTP ответы единого формата.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    """Базовое исключение витрины."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StorefrontError):
    """Сущность с указанным идентификатором не найдена."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class DuplicateNameError(StorefrontError):
    """Имя бренда или категории уже занято."""

    status_code = status.HTTP_409_CONFLICT


class UploadError(StorefrontError):
    """Ошибка валидации или сохранения загружаемого файла."""


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Подключить обработчики исключений витрины к приложению."""
    app.add_exception_handler(StorefrontError, storefront_error_handler)
