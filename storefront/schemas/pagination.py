"""
Схемы для пагинации.
"""

from typing import Optional

from pydantic import BaseModel


class PageMeta(BaseModel):
    """
    Метаданные пагинации.

    Attributes:
        page: Номер текущей страницы
        page_size: Размер страницы
        total: Общее количество записей
        total_pages: Общее количество страниц
        next_page: Номер следующей страницы или None, если страниц больше нет
    """

    page: int
    page_size: int
    total: int
    total_pages: int
    next_page: Optional[int] = None

    @classmethod
    def create(cls, page: int, page_size: int, total: int) -> "PageMeta":
        """
        Создает экземпляр PageMeta с автоматическим расчетом total_pages.

        Args:
            page: Номер текущей страницы
            page_size: Размер страницы
            total: Общее количество записей

        Returns:
            PageMeta: Экземпляр с рассчитанными метаданными
        """
        total_pages = max(1, (total + page_size - 1) // page_size) if total > 0 else 1
        next_page = page + 1 if page * page_size < total else None
        return cls(
            page=page,
            page_size=page_size,
            total=total,
            total_pages=total_pages,
            next_page=next_page,
        )
