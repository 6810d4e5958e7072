"""
API endpoints панели фильтров.

Разбирает параметры URL в состояние фильтров и возвращает все,
что нужно для отрисовки панели: варианты с отметками, бейджи,
нормализованную строку запроса и заголовок сетки.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from storefront.db.database import get_db
from storefront.schemas.filters import FilterOption, FilterView
from storefront.services import catalog
from storefront.services.filter_state import DEFAULT_TITLE, SEX_OPTIONS, SIZES, FilterState

router = APIRouter()


def build_filter_view(db: Session, state: FilterState, home: bool, title: str) -> FilterView:
    """Собрать представление панели фильтров для текущего состояния."""
    state.set_price_bounds(catalog.price_range(db, catalog.with_grid_defaults(state)))

    def options(values, selected):
        return [FilterOption(value=v, label=v, checked=v in selected) for v in values]

    return FilterView(
        title=state.title(is_home=home, default=title),
        filters=state.selection(),
        categories=options([c.name for c in catalog.cached_categories(db)], state.category),
        brands=options([b.name for b in catalog.cached_brands(db)], state.brand),
        sizes=options(SIZES, state.size),
        sex=options(SEX_OPTIONS, state.sex),
        badges=state.badges(),
        price_bounds=state.price_bounds,
        query=state.to_query_string(),
        has_filters=state.has_filters,
    )


@router.get("", response_model=FilterView)
def get_filters(
    request: Request,
    db: Session = Depends(get_db),
    home: bool = Query(False, description="Сетка на главной странице"),
    title: str = Query(DEFAULT_TITLE, description="Заголовок сетки по умолчанию"),
):
    """
    Состояние панели фильтров по параметрам URL.

    Args:
        request: Запрос (фильтры читаются из строки запроса)
        db: Сессия базы данных
        home: Сетка на главной странице (заголовок всегда Collection)
        title: Заголовок сетки по умолчанию

    Returns:
        FilterView: Варианты фильтров, бейджи, строка запроса и заголовок
    """
    state = FilterState.from_query_params(request.query_params)
    return build_filter_view(db, state, home, title)


@router.get("/toggle", response_model=FilterView)
def toggle_filter(
    request: Request,
    key: str = Query(..., description="Фильтр: category/size/sex/brand"),
    value: str = Query(..., description="Переключаемое значение"),
    db: Session = Depends(get_db),
    home: bool = Query(False),
    title: str = Query(DEFAULT_TITLE),
):
    """Переключить значение фильтра (чекбокс) и вернуть новое состояние."""
    state = FilterState.from_query_params(request.query_params)
    try:
        state.set_filter(key, value)
    except ValueError as e:
        raise HTTPException(400, detail=str(e))
    return build_filter_view(db, state, home, title)


@router.get("/remove", response_model=FilterView)
def remove_filter(
    request: Request,
    key: str = Query(..., description="Фильтр бейджа: category/size/sex/brand/search/price"),
    value: str = Query("", description="Значение бейджа"),
    db: Session = Depends(get_db),
    home: bool = Query(False),
    title: str = Query(DEFAULT_TITLE),
):
    """Снять фильтр по бейджу и вернуть новое состояние."""
    state = FilterState.from_query_params(request.query_params)
    try:
        state.remove(key, value)
    except ValueError as e:
        raise HTTPException(400, detail=str(e))
    return build_filter_view(db, state, home, title)
