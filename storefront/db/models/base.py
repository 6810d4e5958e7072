"""
Базовый класс для всех моделей SQLAlchemy.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Имена ограничений для предсказуемых миграций (Postgres и SQLite)
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Базовый класс моделей витрины с общим MetaData."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
