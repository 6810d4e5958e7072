"""
Схемы таблиц административной панели.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel


class TableColumn(BaseModel):
    id: str
    header: str
    sortable: bool = False


class TableCell(BaseModel):
    """
    Ячейка таблицы.

    type: text / link / badge; для link заполнен href, для badge - variant.
    """

    type: str = "text"
    value: Any = None
    href: Optional[str] = None
    variant: Optional[str] = None


class ConfirmDialog(BaseModel):
    """Диалог подтверждения удаления."""

    title: str = "Are you absolutely sure?"
    description: str
    cancel: str = "Cancel"
    action: str = "Delete"
    method: str = "DELETE"
    endpoint: str


class EditDialog(BaseModel):
    """Диалог редактирования с начальными значениями формы."""

    title: str
    endpoint: str
    values: Dict[str, Any]


class RowAction(BaseModel):
    id: str
    label: str
    href: Optional[str] = None
    value: Optional[str] = None
    dialog: Optional[EditDialog] = None
    confirm: Optional[ConfirmDialog] = None


class TableRow(BaseModel):
    id: Union[int, str]
    cells: Dict[str, TableCell]
    actions: List[RowAction]


class TableView(BaseModel):
    columns: List[TableColumn]
    rows: List[TableRow]
    sort: Optional[str] = None
    direction: str = "asc"
    total: int
