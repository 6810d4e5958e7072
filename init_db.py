#!/usr/bin/env python3
"""
Скрипт для инициализации базы данных
"""

import logging
import sys

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from storefront.core.logging_config import setup_logging
from storefront.db.database import engine
from storefront.db.models import Base

logger = logging.getLogger("init_db")


def init_database(bind=engine) -> bool:
    """Создает все таблицы в базе данных."""
    logger.info("Инициализация базы данных...")

    try:
        Base.metadata.create_all(bind=bind)
    except SQLAlchemyError as e:
        logger.error("Ошибка создания таблиц: %s", e)
        return False

    tables = inspect(bind).get_table_names()
    logger.info("Таблиц в базе: %d", len(tables))
    for table in tables:
        logger.info("  - %s", table)
    return True


if __name__ == "__main__":
    setup_logging()
    if not init_database():
        sys.exit(1)
