"""View-model assembly for the category listing page."""

from typing import Any, Dict, Optional

from starlette.requests import Request

from app.models.category import Category
from app.repositories import LengthAwarePage
from app.schemas.category import (
    Category as CategorySchema,
    CategoryIndexQuery,
    CategoryPage,
    FilterField,
)
from app.schemas.enums import (
    CategoryFiltersEnum,
    CategorySortFieldsEnum,
    FilterFieldTypeEnum,
    SortOrderEnum,
)

INDEX_COMPONENT = "Category/Index"


def serialize_category(category: Category, fields=()) -> Dict[str, Any]:
    if fields:
        return {field.value: getattr(category, field.value) for field in fields}
    return CategorySchema.model_validate(category).model_dump()


def query_params_dict(request: Request) -> Dict[str, Any]:
    """Current query string as a dict; repeated keys become lists."""
    params: Dict[str, Any] = {}
    for key in request.query_params.keys():
        values = request.query_params.getlist(key)
        params[key] = values if len(values) > 1 else values[0]
    return params


def serialize_page(
    page: LengthAwarePage[Category], request: Request, query: CategoryIndexQuery
) -> Dict[str, Any]:
    """Page payload whose navigation links keep the current query string."""

    def page_url(number: int) -> str:
        return str(request.url.include_query_params(page=number))

    payload = CategoryPage(
        data=[serialize_category(item, query.fields) for item in page.items],
        current_page=page.page,
        per_page=page.per_page,
        total=page.total,
        last_page=page.last_page,
        from_=page.from_item,
        to=page.to_item,
        path=str(request.url.replace(query="")),
        query=query_params_dict(request),
        first_page_url=page_url(1),
        last_page_url=page_url(page.last_page),
        prev_page_url=page_url(page.page - 1) if page.page > 1 else None,
        next_page_url=page_url(page.page + 1) if page.has_more_pages else None,
    )
    return payload.model_dump(mode="json", by_alias=True)


def filter_descriptors(query: CategoryIndexQuery) -> Dict[str, Dict[str, Any]]:
    """Describe the inputs of the listing filter bar, echoing current values."""
    filters = {
        CategoryFiltersEnum.NAME.value: FilterField(
            label=CategoryFiltersEnum.NAME.label,
            placeholder="Enter name.",
            type=FilterFieldTypeEnum.STRING.value,
            value=query.name or "",
        ),
        "sort_by": FilterField(
            label="Sort By",
            placeholder="Select a sort field",
            type=FilterFieldTypeEnum.SELECT_STATIC.value,
            value=query.sort_by.value if query.sort_by else "",
            options=CategorySortFieldsEnum.options(),
        ),
        "sort_order": FilterField(
            label="Sort order",
            placeholder="Select a sort order",
            type=FilterFieldTypeEnum.SELECT_STATIC.value,
            value=query.sort_order.value if query.sort_order else "",
            options=SortOrderEnum.options(),
        ),
    }
    return {key: field.model_dump(exclude_none=True) for key, field in filters.items()}


def index_page(
    request: Request,
    page: LengthAwarePage[Category],
    query: CategoryIndexQuery,
    flash: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Page object for the interactive listing: component name plus props."""
    return {
        "component": INDEX_COMPONENT,
        "props": {
            "categories": serialize_page(page, request, query),
            "filters": filter_descriptors(query),
            "flash": flash,
        },
        "url": str(request.url),
    }
