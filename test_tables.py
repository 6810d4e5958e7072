"""
Тесты описания колонок таблиц административной панели.
"""

from types import SimpleNamespace

import pytest

from storefront.services.tables import BRAND_TABLE, CATEGORY_TABLE, PRODUCT_TABLE, render_table


def product(id, name, brand=None, category=None, price=100, available=True, is_new=False):
    return SimpleNamespace(
        id=id,
        name=name,
        price=price,
        brand=SimpleNamespace(name=brand) if brand else None,
        category=SimpleNamespace(name=category) if category else None,
        available=available,
        is_new=is_new,
    )


def test_missing_references_render_as_dash():
    view = render_table(PRODUCT_TABLE, [product("p1", "Runner")])

    cells = view.rows[0].cells
    assert cells["brand"].value == "-"
    assert cells["category"].value == "-"
    assert cells["available"].value == "Yes"
    assert cells["available"].variant == "primary"


def test_sort_by_brand_puts_missing_first():
    items = [product("p1", "A", brand="Vans"), product("p2", "B"), product("p3", "C", brand="asics")]

    view = render_table(PRODUCT_TABLE, items, sort="brand")

    assert [row.id for row in view.rows] == ["p2", "p3", "p1"]
    assert [row.cells["index"].value for row in view.rows] == [2, 3, 1]


def test_columns_metadata():
    view = render_table(CATEGORY_TABLE, [])

    assert [(c.id, c.header, c.sortable) for c in view.columns] == [
        ("index", "#", False),
        ("name", "Name", True),
        ("description", "Description", False),
    ]
    assert view.total == 0


def test_product_delete_confirmation_text():
    view = render_table(PRODUCT_TABLE, [product("p1", "Runner")])

    confirm = view.rows[0].actions[-1].confirm
    assert confirm.description == "This action cannot be undone. This will permanently delete the product."
    assert confirm.endpoint == "/api/v1/admin/products/p1"
    assert confirm.method == "DELETE"


@pytest.mark.parametrize("sort, direction", [("index", "asc"), ("missing", "asc"), ("name", "sideways")])
def test_invalid_sort_is_rejected(sort, direction):
    with pytest.raises(ValueError):
        render_table(BRAND_TABLE, [SimpleNamespace(id=1, name="Nike")], sort=sort, direction=direction)
