#!/usr/bin/env python3
"""
Скрипт для выпуска токена администратора.

Токены выдает внешний сервис входа; скрипт нужен для локальной
разработки и подписывает токен тем же SECRET_KEY.
"""

import argparse
from datetime import timedelta

from storefront.core.auth import auth_service


def issue_token(subject: str = "admin", hours: int = 8) -> str:
    """JWT с правами администратора для subject."""
    return auth_service.create_access_token(
        data={"sub": subject, "is_admin": True},
        expires_delta=timedelta(hours=hours),
    )


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Выпуск токена администратора")
    parser.add_argument("--subject", default="admin", help="Идентификатор администратора")
    parser.add_argument("--hours", type=int, default=8, help="Срок действия в часах")
    args = parser.parse_args(argv)
    print(issue_token(args.subject, args.hours))


if __name__ == "__main__":
    main()
