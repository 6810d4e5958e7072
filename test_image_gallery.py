"""
Тесты галереи изображений формы и проверки загружаемых файлов.
"""

from io import BytesIO

import pytest

from conftest import png_bytes
from storefront.core.errors import UploadError
from storefront.services.image_gallery import ImageGallery
from storefront.services.image_service import PendingUpload, image_service


def upload(name="new.png", content=None):
    return PendingUpload(filename=name, content=png_bytes() if content is None else content)


def test_gallery_keeps_order_when_resolving():
    gallery = ImageGallery(["/a.jpg"])
    gallery.add_files([upload("x.png"), upload("y.png")])
    gallery.set_primary(2)

    # URL загруженных файлов передаются в текущем порядке галереи
    assert [u.filename for u in gallery.pending_uploads] == ["y.png", "x.png"]
    assert gallery.resolve(["/y.png", "/x.png"]) == ["/y.png", "/a.jpg", "/x.png"]


def test_gallery_set_primary_on_first_is_noop():
    gallery = ImageGallery(["/a.jpg", "/b.jpg"])

    assert gallery.set_primary(0) is False
    assert gallery.existing_urls == ["/a.jpg", "/b.jpg"]


def test_gallery_remove_and_clear():
    gallery = ImageGallery(["/a.jpg", "/b.jpg"])
    gallery.add_files([upload()])

    removed = gallery.remove(2)
    assert removed.is_pending
    assert gallery.pending_uploads == []

    with pytest.raises(IndexError):
        gallery.remove(5)

    gallery.clear()
    assert gallery.items == []
    assert gallery.existing_urls == []


def test_gallery_resolve_requires_all_uploads():
    gallery = ImageGallery()
    gallery.add_files([upload(), upload()])

    with pytest.raises(ValueError):
        gallery.resolve(["/only-one.png"])


@pytest.mark.parametrize(
    "pending",
    [
        PendingUpload(filename="empty.png", content=b""),
        PendingUpload(filename="notes.txt", content=b"text"),
        PendingUpload(filename="broken.png", content=b"\x89PNG broken"),
    ],
)
def test_validate_rejects_bad_files(pending):
    with pytest.raises(UploadError):
        image_service.validate(pending)


def test_validate_accepts_png():
    assert image_service.validate(upload()) == "image/png"


def test_generate_path_layout():
    path = image_service.generate_path("Photo.JPG")
    folder, name = path.split("/")[1:]

    assert path.startswith("products/")
    assert name.endswith(".jpg")
    assert name.startswith(folder)


class FailingStorage:
    """Хранилище, которое принимает только первый файл."""

    def __init__(self):
        self.saved = []
        self.deleted = []

    def save_file(self, file_path, file_data: BytesIO, content_type=None):
        if self.saved:
            return False
        self.saved.append(file_path)
        return True

    def file_exists(self, file_path):
        return file_path in self.saved

    def get_file_url(self, file_path):
        return f"/static/{file_path}"

    def delete_file(self, file_path):
        self.deleted.append(file_path)
        return True


def test_store_uploads_cleans_up_on_failure():
    storage = FailingStorage()

    with pytest.raises(UploadError):
        image_service.store_uploads([upload("a.png"), upload("b.png")], storage)

    assert storage.deleted == storage.saved


def test_discard_removes_stored_files(storage):
    stored = image_service.save_uploads([upload("a.png"), upload("b.png")], storage)
    assert all(storage.file_exists(image.path) for image in stored)

    image_service.discard(stored, storage)

    assert not any(storage.file_exists(image.path) for image in stored)
