"""
Отправка формы товара.

Загружает новые изображения, собирает итоговую галерею и
создает или обновляет товар. Результат - уведомление для администратора.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.core.errors import NotFoundError, UploadError
from storefront.db.models import Brand, Category, Product
from storefront.schemas.common import ActionResult
from storefront.schemas.product import ProductForm
from storefront.services.cache import query_cache
from storefront.services.image_gallery import ImageGallery
from storefront.services.image_service import PendingUpload, StoredImage, image_service
from storefront.services.storage_service import StorageProvider

logger = logging.getLogger(__name__)


def check_references(db: Session, form: ProductForm) -> None:
    """Категория и бренд формы должны существовать."""
    if db.get(Category, form.category) is None:
        raise NotFoundError("Category", form.category)
    if db.get(Brand, form.brand) is None:
        raise NotFoundError("Brand", form.brand)


def apply_form(product: Product, form: ProductForm, images: List[str]) -> None:
    """Перенести значения формы в товар."""
    product.name = form.name
    product.description = form.description or None
    product.price = form.price
    product.discount_price = form.discount_price
    product.category_id = form.category
    product.brand_id = form.brand
    product.sex = form.sex
    product.available = form.available
    product.is_new = form.is_new
    product.show_in_slider = form.show_in_slider
    product.set_sizes(form.sizes)
    product.set_images(images)


def submit_product_form(
    db: Session,
    storage: StorageProvider,
    form: ProductForm,
    uploads: Optional[List[PendingUpload]] = None,
    product: Optional[Product] = None,
    primary_index: int = 0,
) -> ActionResult:
    """
    Создать или обновить товар по данным формы.

    Args:
        db: Сессия базы данных
        storage: Хранилище изображений
        form: Провалидированные данные формы (images - уже сохраненные URL)
        uploads: Новые файлы изображений, добавляются после form.images
        product: Редактируемый товар или None для создания
        primary_index: Индекс изображения, которое станет главным

    Returns:
        ActionResult: Уведомление об итоге; при ошибке загрузки товар не сохраняется
    """
    check_references(db, form)

    gallery = ImageGallery(form.images)
    gallery.add_files(uploads or [])
    if primary_index:
        try:
            gallery.set_primary(primary_index)
        except IndexError:
            return ActionResult.failed("Invalid primary image index")

    stored: List[StoredImage] = []
    if gallery.pending_uploads:
        try:
            stored = image_service.save_uploads(gallery.pending_uploads, storage)
        except UploadError as e:
            logger.warning("Product form image upload failed: %s", e.message)
            return ActionResult.failed("Failed to upload images.")

    is_new_product = product is None
    if is_new_product:
        product = Product()
        db.add(product)

    apply_form(product, form, gallery.resolve([image.url for image in stored]))
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Product form commit failed")
        image_service.discard(stored, storage)
        return ActionResult.failed()
    db.refresh(product)
    query_cache.invalidate("products")

    message = "Product created successfully" if is_new_product else "Product updated successfully"
    logger.info("%s: %s (%s)", message, product.name, product.id)
    return ActionResult(success=True, message=message, id=product.id)
