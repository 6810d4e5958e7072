"""
Схемы бренда.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BrandForm(BaseModel):
    """Форма создания и редактирования бренда."""

    name: str = Field(..., min_length=1, max_length=100, description="Название бренда")

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("name")
    @classmethod
    def name_without_comma(cls, value: str) -> str:
        # Запятая разделяет значения фильтров в URL
        if "," in value:
            raise ValueError("Brand name cannot contain commas.")
        return value


class BrandOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
