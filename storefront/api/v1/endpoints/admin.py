"""
API эндпоинты для административной панели.

Таблицы брендов, категорий и товаров, формы создания и
редактирования, удаление и управление галереей изображений.
Все мутации возвращают ActionResult для всплывающих уведомлений.
"""

import logging
from typing import List, Optional

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Query,
    UploadFile,
    status,
)
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.core.auth import require_admin
from storefront.core.errors import DuplicateNameError, NotFoundError, StorefrontError, UploadError
from storefront.db.database import get_db
from storefront.db.models import Brand, Category, Product
from storefront.schemas.brand import BrandForm, BrandOut
from storefront.schemas.category import CategoryForm, CategoryOut
from storefront.schemas.common import ActionResult
from storefront.schemas.product import (
    PrimaryImageRequest,
    ProductForm,
    ProductFormValues,
    UploadResult,
)
from storefront.schemas.table import TableView
from storefront.services import catalog
from storefront.services.cache import query_cache
from storefront.services.image_gallery import ImageGallery
from storefront.services.image_service import PendingUpload, image_service
from storefront.services.product_form import submit_product_form
from storefront.services.storage_service import StorageProvider, get_storage
from storefront.services.tables import BRAND_TABLE, CATEGORY_TABLE, PRODUCT_TABLE, render_table

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


def _commit(db: Session) -> None:
    """Зафиксировать транзакцию; ошибка базы превращается в уведомление."""
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Admin mutation failed")
        raise StorefrontError("Something went wrong")


def _table(definition, entities, sort: Optional[str], direction: str) -> TableView:
    try:
        return render_table(definition, entities, sort=sort, direction=direction)
    except ValueError as e:
        raise HTTPException(400, detail=str(e))


def _get_or_404(db: Session, model, entity_id):
    entity = db.get(model, entity_id)
    if entity is None:
        raise NotFoundError(model.__name__, entity_id)
    return entity


def _ensure_unique_name(db: Session, model, name: str, exclude_id: Optional[int] = None) -> None:
    stmt = select(model.id).where(model.name == name)
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    if db.scalar(stmt) is not None:
        raise DuplicateNameError(f"{model.__name__} with this name already exists")


def _pending_uploads(files: Optional[List[UploadFile]]) -> List[PendingUpload]:
    return [
        PendingUpload(filename=f.filename or "", content=f.file.read(), content_type=f.content_type)
        for f in files or []
        if f.filename
    ]


# ==================== БРЕНДЫ ====================


@router.get("/brands/table", response_model=TableView)
def brands_table(
    sort: Optional[str] = Query(None, description="Колонка сортировки"),
    direction: str = Query("asc", description="Направление: asc/desc"),
    db: Session = Depends(get_db),
):
    """Таблица брендов в порядке создания."""
    brands = db.scalars(select(Brand).order_by(Brand.id)).all()
    return _table(BRAND_TABLE, brands, sort, direction)


@router.get("/brands/{brand_id}", response_model=BrandOut)
def get_brand(brand_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, Brand, brand_id)


@router.post("/brands", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def create_brand(form: BrandForm, db: Session = Depends(get_db)):
    """
    Создать бренд.

    Raises:
        DuplicateNameError: Если бренд с таким названием уже есть
    """
    _ensure_unique_name(db, Brand, form.name)
    brand = Brand(name=form.name)
    db.add(brand)
    _commit(db)
    query_cache.invalidate("brands", "products")
    logger.info("Brand created: %s (%s)", brand.name, brand.id)
    return ActionResult.ok("Brand created successfully", id=brand.id)


@router.patch("/brands/{brand_id}", response_model=ActionResult)
def update_brand(brand_id: int, form: BrandForm, db: Session = Depends(get_db)):
    brand = _get_or_404(db, Brand, brand_id)
    _ensure_unique_name(db, Brand, form.name, exclude_id=brand.id)
    brand.name = form.name
    _commit(db)
    query_cache.invalidate("brands", "products")
    return ActionResult.ok("Brand updated successfully", id=brand.id)


@router.delete("/brands/{brand_id}", response_model=ActionResult)
def delete_brand(brand_id: int, db: Session = Depends(get_db)):
    """Удалить бренд; у связанных товаров ссылка на бренд обнуляется."""
    brand = _get_or_404(db, Brand, brand_id)
    db.delete(brand)
    _commit(db)
    query_cache.invalidate("brands", "products")
    logger.info("Brand deleted: %s", brand_id)
    return ActionResult.ok("Brand deleted successfully", id=brand_id)


# ==================== КАТЕГОРИИ ====================


@router.get("/categories/table", response_model=TableView)
def categories_table(
    sort: Optional[str] = Query(None, description="Колонка сортировки"),
    direction: str = Query("asc", description="Направление: asc/desc"),
    db: Session = Depends(get_db),
):
    categories = db.scalars(select(Category).order_by(Category.id)).all()
    return _table(CATEGORY_TABLE, categories, sort, direction)


@router.get("/categories/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, db: Session = Depends(get_db)):
    """Категория для страницы редактирования."""
    return _get_or_404(db, Category, category_id)


@router.post("/categories", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def create_category(form: CategoryForm, db: Session = Depends(get_db)):
    _ensure_unique_name(db, Category, form.name)
    category = Category(name=form.name, description=form.description or None)
    db.add(category)
    _commit(db)
    query_cache.invalidate("categories", "products")
    logger.info("Category created: %s (%s)", category.name, category.id)
    return ActionResult.ok("Category created successfully", id=category.id)


@router.patch("/categories/{category_id}", response_model=ActionResult)
def update_category(category_id: int, form: CategoryForm, db: Session = Depends(get_db)):
    category = _get_or_404(db, Category, category_id)
    _ensure_unique_name(db, Category, form.name, exclude_id=category.id)
    category.name = form.name
    category.description = form.description or None
    _commit(db)
    query_cache.invalidate("categories", "products")
    return ActionResult.ok("Category updated successfully", id=category.id)


@router.delete("/categories/{category_id}", response_model=ActionResult)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    """Удалить категорию; у связанных товаров ссылка на категорию обнуляется."""
    category = _get_or_404(db, Category, category_id)
    db.delete(category)
    _commit(db)
    query_cache.invalidate("categories", "products")
    logger.info("Category deleted: %s", category_id)
    return ActionResult.ok("Category deleted successfully", id=category_id)


# ==================== ТОВАРЫ ====================


def product_form_data(
    name: str = Form(""),
    description: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    discount_price: Optional[str] = Form(None, alias="discountPrice"),
    sizes: str = Form(""),
    category: Optional[str] = Form(None),
    brand: Optional[str] = Form(None),
    sex: str = Form("Men"),
    available: bool = Form(True),
    is_new: bool = Form(False),
    show_in_slider: bool = Form(False, alias="showInSlider"),
    existing_images: Optional[List[str]] = Form(None),
) -> ProductForm:
    """
    Dependency: данные multipart формы товара.

    Ошибки валидации возвращаются как 422 с ошибками по полям.
    """
    try:
        return ProductForm(
            name=name,
            description=description,
            price=price,
            discount_price=discount_price,
            sizes=sizes,
            category=category,
            brand=brand,
            sex=sex,
            available=available,
            is_new=is_new,
            show_in_slider=show_in_slider,
            images=existing_images or [],
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))


def _form_response(result: ActionResult, success_status: int = status.HTTP_200_OK):
    if not result.success:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=result.model_dump())
    return JSONResponse(status_code=success_status, content=result.model_dump())


@router.get("/products/table", response_model=TableView)
def products_table(
    sort: Optional[str] = Query(None, description="Колонка сортировки"),
    direction: str = Query("asc", description="Направление: asc/desc"),
    db: Session = Depends(get_db),
):
    """Таблица товаров, сначала новые."""
    products = db.scalars(select(Product).order_by(Product.created_at.desc(), Product.id)).all()
    return _table(PRODUCT_TABLE, products, sort, direction)


@router.get("/products/new/form", response_model=ProductFormValues)
def new_product_form():
    """Пустые значения формы создания товара."""
    return ProductFormValues.from_product()


@router.get("/products/{product_id}/form", response_model=ProductFormValues)
def edit_product_form(product_id: str, db: Session = Depends(get_db)):
    """Значения формы редактирования из существующего товара."""
    return ProductFormValues.from_product(catalog.get_product(db, product_id))


@router.post("/products", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def create_product(
    form: ProductForm = Depends(product_form_data),
    images: Optional[List[UploadFile]] = File(None),
    primary_index: int = Form(0, ge=0),
    db: Session = Depends(get_db),
    storage: StorageProvider = Depends(get_storage),
):
    """
    Создать товар из multipart формы.

    Args:
        form: Поля формы (existing_images - уже загруженные URL)
        images: Новые файлы изображений, добавляются после existing_images
        primary_index: Индекс изображения, которое станет главным
        db: Сессия базы данных
        storage: Хранилище изображений

    Returns:
        ActionResult: id созданного товара; 400 при ошибке загрузки изображений
    """
    result = submit_product_form(db, storage, form, _pending_uploads(images), primary_index=primary_index)
    return _form_response(result, status.HTTP_201_CREATED)


@router.put("/products/{product_id}", response_model=ActionResult)
def update_product(
    product_id: str,
    form: ProductForm = Depends(product_form_data),
    images: Optional[List[UploadFile]] = File(None),
    primary_index: int = Form(0, ge=0),
    db: Session = Depends(get_db),
    storage: StorageProvider = Depends(get_storage),
):
    """Обновить товар из multipart формы."""
    product = catalog.get_product(db, product_id)
    result = submit_product_form(
        db, storage, form, _pending_uploads(images), product=product, primary_index=primary_index
    )
    return _form_response(result)


@router.delete("/products/{product_id}", response_model=ActionResult)
def delete_product(product_id: str, db: Session = Depends(get_db)):
    product = catalog.get_product(db, product_id)
    db.delete(product)
    _commit(db)
    query_cache.invalidate("products")
    logger.info("Product deleted: %s", product_id)
    return ActionResult.ok("Product has been deleted successfully!", id=product_id)


# ==================== ИЗОБРАЖЕНИЯ ====================


@router.post("/uploads", response_model=UploadResult)
def upload_images(
    files: List[UploadFile] = File(..., description="Файлы изображений"),
    storage: StorageProvider = Depends(get_storage),
):
    """
    Загрузить изображения без привязки к товару.

    Returns:
        UploadResult: URL файлов в порядке запроса

    Raises:
        UploadError: Если файл не прошел проверку или не сохранился
    """
    uploads = _pending_uploads(files)
    if not uploads:
        raise UploadError("No files provided")
    return UploadResult(urls=image_service.store_uploads(uploads, storage))


def _save_gallery(db: Session, product: Product, urls: List[str], message: str) -> ActionResult:
    product.set_images(urls)
    _commit(db)
    query_cache.invalidate("products")
    return ActionResult.ok(message, id=product.id)


@router.post("/products/{product_id}/images", response_model=ActionResult)
def add_product_images(
    product_id: str,
    files: List[UploadFile] = File(..., description="Файлы изображений"),
    db: Session = Depends(get_db),
    storage: StorageProvider = Depends(get_storage),
):
    """Добавить изображения в конец галереи товара."""
    product = catalog.get_product(db, product_id)
    gallery = ImageGallery(product.image_urls)
    gallery.add_files(_pending_uploads(files))
    try:
        stored = image_service.save_uploads(gallery.pending_uploads, storage)
    except UploadError as e:
        logger.warning("Gallery upload for %s failed: %s", product_id, e.message)
        return _form_response(ActionResult.failed("Failed to upload images."))
    try:
        return _save_gallery(db, product, gallery.resolve([image.url for image in stored]), "Images added")
    except StorefrontError:
        image_service.discard(stored, storage)
        raise


@router.patch("/products/{product_id}/images/primary", response_model=ActionResult)
def set_primary_image(
    product_id: str,
    payload: PrimaryImageRequest,
    db: Session = Depends(get_db),
):
    """Сделать изображение главным (перенести в начало галереи)."""
    product = catalog.get_product(db, product_id)
    gallery = ImageGallery(product.image_urls)
    try:
        moved = gallery.set_primary(payload.index)
    except IndexError as e:
        raise HTTPException(404, detail=str(e))
    if not moved:
        return ActionResult.ok("Primary image set", id=product.id)
    return _save_gallery(db, product, gallery.existing_urls, "Primary image set")


@router.delete("/products/{product_id}/images/{index}", response_model=ActionResult)
def remove_product_image(product_id: str, index: int, db: Session = Depends(get_db)):
    product = catalog.get_product(db, product_id)
    gallery = ImageGallery(product.image_urls)
    try:
        gallery.remove(index)
    except IndexError as e:
        raise HTTPException(404, detail=str(e))
    return _save_gallery(db, product, gallery.existing_urls, "Image removed")


@router.delete("/products/{product_id}/images", response_model=ActionResult)
def clear_product_images(product_id: str, db: Session = Depends(get_db)):
    """Удалить все изображения из галереи товара."""
    product = catalog.get_product(db, product_id)
    gallery = ImageGallery(product.image_urls)
    gallery.clear()
    return _save_gallery(db, product, gallery.existing_urls, "Images cleared")
