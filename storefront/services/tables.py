"""
Описание колонок таблиц административной панели.

Каждая таблица (бренды, категории, товары) задается списком колонок
и набором действий над строкой. render_table превращает сущности
в готовое к отрисовке представление с сортировкой по колонке.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

from storefront.schemas.table import (
    ConfirmDialog,
    EditDialog,
    RowAction,
    TableCell,
    TableColumn,
    TableRow,
    TableView,
)
from storefront.services.formatting import format_price

API_PREFIX = "/api/v1/admin"


@dataclass
class Column:
    """
    Колонка таблицы.

    Attributes:
        id: Идентификатор колонки (ключ ячейки и параметр сортировки)
        header: Заголовок
        cell: Функция (сущность, индекс строки) -> ячейка
        sort_key: Ключ сортировки; колонка без него не сортируется
    """

    id: str
    header: str
    cell: Callable[[Any, int], TableCell]
    sort_key: Optional[Callable[[Any], Any]] = None

    @property
    def sortable(self) -> bool:
        return self.sort_key is not None


@dataclass
class TableDefinition:
    entity: str
    columns: List[Column]
    actions: Callable[[Any], List[RowAction]] = field(default=lambda entity: [])

    def column(self, column_id: str) -> Column:
        for column in self.columns:
            if column.id == column_id:
                return column
        raise KeyError(column_id)


# ---------- ячейки ----------

def text(value) -> TableCell:
    return TableCell(type="text", value=value)


def link(value, href: str) -> TableCell:
    return TableCell(type="link", value=value, href=href)


def yes_no_badge(flag: bool, off_variant: str) -> TableCell:
    return TableCell(type="badge", value="Yes" if flag else "No", variant="primary" if flag else off_variant)


def ref_name(entity) -> str:
    """Название связанной сущности или "-", если ссылка не заполнена."""
    return entity.name if entity is not None else "-"


def index_column() -> Column:
    return Column(id="index", header="#", cell=lambda entity, index: text(index + 1))


def _name_sort_key(entity) -> str:
    return (entity.name or "").casefold()


# ---------- действия ----------

def copy_id_action(entity) -> RowAction:
    return RowAction(id="copy_id", label="Copy ID", value=str(entity.id))


def delete_action(endpoint: str, description: str) -> RowAction:
    return RowAction(
        id="delete",
        label="Delete",
        confirm=ConfirmDialog(description=description, endpoint=endpoint),
    )


def _delete_description(entity_name: str, detaches_products: bool) -> str:
    description = f"This action cannot be undone. This will permanently delete the {entity_name}"
    if detaches_products:
        description += " and remove it from any associated products"
    return description + "."


def brand_actions(brand) -> List[RowAction]:
    return [
        copy_id_action(brand),
        RowAction(
            id="edit",
            label="Edit",
            dialog=EditDialog(
                title="Edit Brand",
                endpoint=f"{API_PREFIX}/brands/{brand.id}",
                values={"name": brand.name},
            ),
        ),
        delete_action(f"{API_PREFIX}/brands/{brand.id}", _delete_description("brand", True)),
    ]


def category_actions(category) -> List[RowAction]:
    return [
        copy_id_action(category),
        RowAction(id="edit", label="Edit", href=f"/dashboard/categories/edit/{category.id}"),
        delete_action(f"{API_PREFIX}/categories/{category.id}", _delete_description("category", True)),
    ]


def product_actions(product) -> List[RowAction]:
    return [
        copy_id_action(product),
        delete_action(f"{API_PREFIX}/products/{product.id}", _delete_description("product", False)),
    ]


# ---------- таблицы ----------

BRAND_TABLE = TableDefinition(
    entity="brand",
    columns=[
        index_column(),
        Column(id="name", header="Name", cell=lambda b, i: text(b.name), sort_key=_name_sort_key),
    ],
    actions=brand_actions,
)

CATEGORY_TABLE = TableDefinition(
    entity="category",
    columns=[
        index_column(),
        Column(
            id="name",
            header="Name",
            cell=lambda c, i: link(c.name, f"/dashboard/categories/edit/{c.id}"),
            sort_key=_name_sort_key,
        ),
        Column(id="description", header="Description", cell=lambda c, i: text(c.description or "")),
    ],
    actions=category_actions,
)

PRODUCT_TABLE = TableDefinition(
    entity="product",
    columns=[
        index_column(),
        Column(
            id="name",
            header="Name",
            cell=lambda p, i: link(p.name, f"/dashboard/product/{p.id}/edit"),
            sort_key=_name_sort_key,
        ),
        Column(id="price", header="Price", cell=lambda p, i: text(format_price(p.price))),
        Column(id="category", header="Category", cell=lambda p, i: text(ref_name(p.category))),
        Column(
            id="brand",
            header="Brand",
            cell=lambda p, i: text(ref_name(p.brand)),
            sort_key=lambda p: (p.brand.name if p.brand is not None else "").casefold(),
        ),
        Column(id="available", header="Available", cell=lambda p, i: yes_no_badge(p.available, "destructive")),
        Column(id="is_new", header="New", cell=lambda p, i: yes_no_badge(p.is_new, "secondary")),
    ],
    actions=product_actions,
)


def render_table(
    definition: TableDefinition,
    entities: Sequence[Any],
    sort: Optional[str] = None,
    direction: str = "asc",
) -> TableView:
    """
    Построить представление таблицы.

    Номер строки (#) соответствует позиции сущности в исходной выборке
    и не меняется при сортировке.

    Raises:
        ValueError: Если колонка не существует или не сортируется
    """
    if direction not in ("asc", "desc"):
        raise ValueError(f"Invalid sort direction: {direction}")

    indexed = list(enumerate(entities))
    if sort:
        try:
            column = definition.column(sort)
        except KeyError:
            raise ValueError(f"Unknown column: {sort}") from None
        if not column.sortable:
            raise ValueError(f"Column is not sortable: {sort}")
        indexed.sort(key=lambda pair: column.sort_key(pair[1]), reverse=direction == "desc")

    rows = [
        TableRow(
            id=entity.id,
            cells={column.id: column.cell(entity, index) for column in definition.columns},
            actions=definition.actions(entity),
        )
        for index, entity in indexed
    ]
    return TableView(
        columns=[
            TableColumn(id=column.id, header=column.header, sortable=column.sortable)
            for column in definition.columns
        ],
        rows=rows,
        sort=sort,
        direction=direction,
        total=len(rows),
    )
