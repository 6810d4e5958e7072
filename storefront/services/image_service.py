"""
Сервис для работы с изображениями товаров.

Обеспечивает валидацию загружаемых файлов, генерацию путей
и сохранение файлов в хранилище.
"""

import logging
import mimetypes
import uuid
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import List, Optional

from PIL import Image, UnidentifiedImageError

from storefront.core.config import settings
from storefront.core.errors import UploadError
from storefront.services.storage_service import StorageProvider

logger = logging.getLogger(__name__)


@dataclass
class PendingUpload:
    """Выбранный, но еще не загруженный файл изображения."""

    filename: str
    content: bytes
    content_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class StoredImage:
    """Файл, сохраненный в хранилище."""

    path: str
    url: str


class ImageService:
    """
    Сервис для работы с изображениями товаров.

    Обеспечивает:
    - Валидацию загружаемых файлов (расширение, MIME, размер, содержимое)
    - Генерацию путей для хранилища
    - Загрузку пачки файлов с откатом при ошибке
    """

    SUPPORTED_MIME_TYPES = {
        'image/jpeg', 'image/jpg', 'image/png',
        'image/webp', 'image/gif'
    }

    # Максимальные размеры
    MAX_DIMENSIONS = (6000, 6000)

    def validate(self, upload: PendingUpload) -> str:
        """
        Валидация загруженного файла.

        Args:
            upload: Загружаемый файл

        Returns:
            str: MIME тип файла

        Raises:
            UploadError: Если файл не проходит проверку
        """
        if not upload.content:
            raise UploadError(f"Empty file: {upload.filename}")

        if upload.size > settings.MAX_IMAGE_SIZE:
            raise UploadError(
                f"File size exceeds maximum allowed size of {settings.MAX_IMAGE_SIZE} bytes"
            )

        file_ext = Path(upload.filename).suffix.lower()
        if file_ext not in settings.allowed_image_extensions:
            raise UploadError(
                f"Unsupported file format: {file_ext or upload.filename}. "
                f"Supported: {', '.join(settings.allowed_image_extensions)}"
            )

        mime_type, _ = mimetypes.guess_type(upload.filename)
        if mime_type not in self.SUPPORTED_MIME_TYPES:
            raise UploadError(f"Unsupported MIME type: {mime_type}")

        try:
            with Image.open(BytesIO(upload.content)) as img:
                width, height = img.size
                img.verify()
        except (UnidentifiedImageError, OSError) as e:
            raise UploadError(f"File is not a valid image: {upload.filename}") from e

        if width > self.MAX_DIMENSIONS[0] or height > self.MAX_DIMENSIONS[1]:
            raise UploadError(f"Image dimensions {width}x{height} are too large")

        return mime_type

    def generate_path(self, filename: str) -> str:
        """
        Генерация пути для сохранения изображения.

        Структура: products/{2 символа}/{uuid}{ext}
        """
        file_id = uuid.uuid4().hex
        return f"products/{file_id[:2]}/{file_id}{Path(filename).suffix.lower()}"

    def save_uploads(self, uploads: List[PendingUpload], storage: StorageProvider) -> List[StoredImage]:
        """
        Провалидировать и сохранить файлы в том же порядке.

        При ошибке уже сохраненные файлы удаляются.

        Raises:
            UploadError: Если хотя бы один файл не прошел проверку или не сохранился
        """
        mime_types = [self.validate(upload) for upload in uploads]

        stored: List[StoredImage] = []
        for upload, mime_type in zip(uploads, mime_types):
            path = self.generate_path(upload.filename)
            if not storage.save_file(path, BytesIO(upload.content), upload.content_type or mime_type):
                self.discard(stored, storage)
                raise UploadError("Image upload failed.")
            stored.append(StoredImage(path=path, url=storage.get_file_url(path)))

        logger.info("Stored %d uploaded image(s)", len(stored))
        return stored

    def store_uploads(self, uploads: List[PendingUpload], storage: StorageProvider) -> List[str]:
        """Сохранить файлы и вернуть их URL в том же порядке."""
        return [image.url for image in self.save_uploads(uploads, storage)]

    def discard(self, stored: List[StoredImage], storage: StorageProvider) -> None:
        """Удалить сохраненные файлы, на которые так и не сослался товар."""
        for image in stored:
            if storage.file_exists(image.path):
                storage.delete_file(image.path)
        if stored:
            logger.info("Discarded %d stored image(s)", len(stored))


# Глобальный экземпляр сервиса
image_service = ImageService()
