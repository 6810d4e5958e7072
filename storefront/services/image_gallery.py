"""
Галерея изображений формы товара.

Упорядоченный список изображений: уже сохраненные URL и новые
файлы, ожидающие загрузки. Первое изображение считается главным.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from storefront.services.image_service import PendingUpload


@dataclass
class GalleryItem:
    url: Optional[str] = None
    upload: Optional[PendingUpload] = None

    @property
    def is_pending(self) -> bool:
        return self.upload is not None


class ImageGallery:
    """
    Превью изображений товара с операциями формы.

    Добавление файлов, удаление по индексу, назначение главного
    изображения (перенос в начало) и полная очистка.
    """

    def __init__(self, urls: Iterable[str] = ()):
        self.items: List[GalleryItem] = [GalleryItem(url=url) for url in urls]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.items):
            raise IndexError(f"Image index out of range: {index}")

    def add_files(self, uploads: Iterable[PendingUpload]) -> None:
        self.items.extend(GalleryItem(upload=upload) for upload in uploads)

    def remove(self, index: int) -> GalleryItem:
        self._check_index(index)
        return self.items.pop(index)

    def set_primary(self, index: int) -> bool:
        """Перенести изображение в начало. Возвращает False, если оно уже главное."""
        self._check_index(index)
        if index == 0:
            return False
        self.items.insert(0, self.items.pop(index))
        return True

    def clear(self) -> None:
        self.items = []

    @property
    def existing_urls(self) -> List[str]:
        return [item.url for item in self.items if not item.is_pending]

    @property
    def pending_uploads(self) -> List[PendingUpload]:
        return [item.upload for item in self.items if item.is_pending]

    def resolve(self, uploaded_urls: List[str]) -> List[str]:
        """
        Итоговый список URL: каждый новый файл заменяется URL после загрузки,
        порядок галереи сохраняется.

        uploaded_urls идут в порядке pending_uploads, то есть в текущем
        порядке галереи, а не в порядке добавления файлов.
        """
        pending = self.pending_uploads
        if len(uploaded_urls) != len(pending):
            raise ValueError(
                f"Expected {len(pending)} uploaded URL(s), got {len(uploaded_urls)}"
            )
        uploaded = iter(uploaded_urls)
        return [next(uploaded) if item.is_pending else item.url for item in self.items]
