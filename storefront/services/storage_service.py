"""
Сервис для работы с хранилищами файлов.

Поддерживает локальное хранилище и Amazon S3 (или совместимые сервисы).
Обеспечивает единый интерфейс для работы с файлами
независимо от типа хранилища.
"""

import logging
import shutil
from abc import ABC, abstractmethod
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from storefront.core.config import settings

logger = logging.getLogger(__name__)


class StorageProvider(ABC):
    """
    Абстрактный базовый класс для провайдеров хранилища.
    """

    @abstractmethod
    def save_file(
        self, file_path: str, file_data: BinaryIO, content_type: Optional[str] = None
    ) -> bool:
        pass

    @abstractmethod
    def get_file_url(self, file_path: str) -> str:
        pass

    @abstractmethod
    def delete_file(self, file_path: str) -> bool:
        pass

    @abstractmethod
    def file_exists(self, file_path: str) -> bool:
        pass


class LocalStorageProvider(StorageProvider):
    """
    Локальное хранилище файлов, раздается приложением по /static.
    """

    def __init__(self, base_path: Optional[str] = None):
        self.base_path = Path(base_path or settings.STORAGE_PATH)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def save_file(
        self, file_path: str, file_data: BinaryIO, content_type: Optional[str] = None
    ) -> bool:
        try:
            full_path = self.base_path / file_path
            full_path.parent.mkdir(parents=True, exist_ok=True)

            with open(full_path, "wb") as f:
                shutil.copyfileobj(file_data, f)

            logger.info("Local storage: saved %s", full_path)
            return True
        except OSError as e:
            logger.error("Local storage: error saving %s: %s", file_path, e)
            return False

    def get_file_url(self, file_path: str) -> str:
        if settings.CDN_BASE_URL:
            return f"{settings.CDN_BASE_URL.rstrip('/')}/{file_path.lstrip('/')}"
        return f"/static/{file_path}"

    def delete_file(self, file_path: str) -> bool:
        try:
            full_path = self.base_path / file_path
            if full_path.exists():
                full_path.unlink()
                return True
            return False
        except OSError as e:
            logger.error("Local storage: error deleting %s: %s", file_path, e)
            return False

    def file_exists(self, file_path: str) -> bool:
        return (self.base_path / file_path).exists()


class S3StorageProvider(StorageProvider):
    """
    Amazon S3 хранилище (или совместимые сервисы, например MinIO).

    Ссылки на файлы постоянные (CDN или публичный bucket), так как
    они сохраняются в галерее товара.
    """

    def __init__(self, bucket_name: str, region: Optional[str] = None, endpoint_url: Optional[str] = None):
        self.bucket_name = bucket_name
        self.region = region or "us-east-1"
        self.endpoint_url = endpoint_url or None

        config = Config(
            retries={"max_attempts": 3, "mode": "adaptive"},
            connect_timeout=10,
            read_timeout=30,
            signature_version="s3v4",
            s3={"addressing_style": "path"},
        )

        self.s3_client = boto3.client(
            "s3",
            region_name=self.region,
            endpoint_url=self.endpoint_url,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
            config=config,
        )

    def save_file(
        self, file_path: str, file_data: BinaryIO, content_type: Optional[str] = None
    ) -> bool:
        extra_args = {}
        if content_type:
            extra_args["ContentType"] = content_type

        try:
            # ContentLength обязателен для MinIO
            file_data.seek(0)
            file_content = file_data.read()
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=file_path,
                Body=BytesIO(file_content),
                ContentLength=len(file_content),
                **extra_args,
            )
            logger.info("S3 storage: uploaded %s to bucket %s", file_path, self.bucket_name)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error("S3 storage: error saving %s: %s", file_path, e)
            return False

    def get_file_url(self, file_path: str) -> str:
        if settings.CDN_BASE_URL:
            return f"{settings.CDN_BASE_URL.rstrip('/')}/{file_path.lstrip('/')}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}/{file_path}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{file_path}"

    def delete_file(self, file_path: str) -> bool:
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=file_path)
            logger.info("S3 storage: deleted %s", file_path)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error("S3 storage: error deleting %s: %s", file_path, e)
            return False

    def file_exists(self, file_path: str) -> bool:
        try:
            self.s3_client.head_object(Bucket=self.bucket_name, Key=file_path)
            return True
        except ClientError:
            return False


# ======================= Создание экземпляра провайдера =======================

_storage_service: Optional[StorageProvider] = None


def create_storage_service() -> StorageProvider:
    """Создать провайдер хранилища по STORAGE_TYPE."""
    if settings.STORAGE_TYPE == "s3":
        logger.info("Using S3 storage, bucket %s", settings.S3_BUCKET_NAME)
        return S3StorageProvider(
            bucket_name=settings.S3_BUCKET_NAME,
            region=settings.AWS_REGION,
            endpoint_url=settings.S3_ENDPOINT_URL,
        )
    logger.info("Using local storage at %s", settings.STORAGE_PATH)
    return LocalStorageProvider()


def get_storage() -> StorageProvider:
    """Dependency: провайдер хранилища (создается при первом обращении)."""
    global _storage_service
    if _storage_service is None:
        _storage_service = create_storage_service()
    return _storage_service
