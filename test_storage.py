"""
Тесты хранилищ файлов: локальное и S3 (через botocore Stubber).
"""

from io import BytesIO

import pytest
from botocore.stub import ANY, Stubber

from storefront.core.config import settings
from storefront.services.storage_service import LocalStorageProvider, S3StorageProvider


@pytest.fixture
def s3(monkeypatch):
    monkeypatch.setattr(settings, "AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setattr(settings, "AWS_SECRET_ACCESS_KEY", "testing")
    provider = S3StorageProvider(bucket_name="product-images", region="eu-central-1")
    with Stubber(provider.s3_client) as stubber:
        yield provider, stubber
        stubber.assert_no_pending_responses()


def test_local_storage_roundtrip(tmp_path):
    storage = LocalStorageProvider(str(tmp_path))

    assert storage.save_file("products/ab/file.png", BytesIO(b"png"), "image/png")
    assert storage.file_exists("products/ab/file.png")
    assert (tmp_path / "products" / "ab" / "file.png").read_bytes() == b"png"
    assert storage.get_file_url("products/ab/file.png") == "/static/products/ab/file.png"

    assert storage.delete_file("products/ab/file.png")
    assert not storage.file_exists("products/ab/file.png")


def test_local_storage_uses_cdn(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "CDN_BASE_URL", "https://cdn.example.com/")
    storage = LocalStorageProvider(str(tmp_path))

    assert storage.get_file_url("/products/x.png") == "https://cdn.example.com/products/x.png"


def test_s3_save_file(s3):
    provider, stubber = s3
    stubber.add_response(
        "put_object",
        {},
        {
            "Bucket": "product-images",
            "Key": "products/ab/file.png",
            "Body": ANY,
            "ContentLength": 3,
            "ContentType": "image/png",
        },
    )

    assert provider.save_file("products/ab/file.png", BytesIO(b"png"), "image/png")


def test_s3_save_error(s3):
    provider, stubber = s3
    stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)

    assert provider.save_file("products/ab/file.png", BytesIO(b"png")) is False


def test_s3_file_exists(s3):
    provider, stubber = s3
    stubber.add_response("head_object", {}, {"Bucket": "product-images", "Key": "a.png"})
    stubber.add_client_error("head_object", service_error_code="404", http_status_code=404)

    assert provider.file_exists("a.png")
    assert not provider.file_exists("a.png")


def test_s3_file_urls(monkeypatch):
    monkeypatch.setattr(settings, "CDN_BASE_URL", "")
    aws = S3StorageProvider(bucket_name="product-images", region="eu-central-1")
    minio = S3StorageProvider(bucket_name="product-images", endpoint_url="http://localhost:9000/")

    assert aws.get_file_url("p/a.png") == "https://product-images.s3.eu-central-1.amazonaws.com/p/a.png"
    assert minio.get_file_url("p/a.png") == "http://localhost:9000/product-images/p/a.png"

    monkeypatch.setattr(settings, "CDN_BASE_URL", "https://cdn.example.com")
    assert aws.get_file_url("p/a.png") == "https://cdn.example.com/p/a.png"
