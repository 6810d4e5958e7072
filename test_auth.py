"""
Тесты проверки токенов администратора и служебных скриптов.
"""

from datetime import timedelta

import jwt
from sqlalchemy import create_engine, inspect

from init_db import init_database
from scripts.issue_admin_token import issue_token, main
from storefront.core.auth import auth_service


def test_token_roundtrip():
    token = auth_service.create_access_token({"sub": "42", "is_admin": True})

    payload = auth_service.verify_token(token)
    assert payload["sub"] == "42"
    assert payload["is_admin"] is True
    assert "exp" in payload


def test_expired_token_is_rejected():
    token = auth_service.create_access_token({"sub": "42"}, expires_delta=timedelta(seconds=-5))

    assert auth_service.verify_token(token) is None


def test_foreign_signature_is_rejected():
    token = jwt.encode({"sub": "42", "is_admin": True}, "other-secret", algorithm="HS256")

    assert auth_service.verify_token(token) is None


def test_issued_token_opens_admin(client):
    token = issue_token("ops", hours=1)

    response = client.get("/api/v1/admin/brands/table", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


def test_issue_token_cli(capsys):
    main(["--subject", "ops", "--hours", "2"])

    payload = auth_service.verify_token(capsys.readouterr().out.strip())
    assert payload["sub"] == "ops"


def test_init_database_creates_tables():
    engine = create_engine("sqlite://")

    assert init_database(bind=engine)
    assert {"brands", "categories", "products", "product_images", "product_sizes", "orders"} <= set(
        inspect(engine).get_table_names()
    )
