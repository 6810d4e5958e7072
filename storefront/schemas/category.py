"""
Схемы категории.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryForm(BaseModel):
    """Форма создания и редактирования категории."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., max_length=250, description="Название категории")
    description: Optional[str] = Field(None, max_length=500, description="Описание")

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        if not value:
            raise ValueError("Category name is required.")
        # Запятая разделяет значения фильтров в URL
        if "," in value:
            raise ValueError("Category name cannot contain commas.")
        return value


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
