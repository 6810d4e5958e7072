"""
Общие схемы ответов.
"""

from typing import Optional, Union

from pydantic import BaseModel


class ActionResult(BaseModel):
    """
    Результат мутации для всплывающего уведомления (toast).

    Attributes:
        success: Успешность операции
        message: Текст уведомления
        id: Идентификатор созданной или измененной сущности
    """

    success: bool
    message: str
    id: Optional[Union[int, str]] = None

    @classmethod
    def ok(cls, message: str, id: Optional[Union[int, str]] = None) -> "ActionResult":
        return cls(success=True, message=message, id=id)

    @classmethod
    def failed(cls, message: str = "Something went wrong") -> "ActionResult":
        return cls(success=False, message=message)
