"""
Shared validation for category endpoints.
Turns raw query parameters into a validated CategoryIndexQuery.
"""

from datetime import datetime
from typing import List, Optional
from fastapi import Query, HTTPException
from pydantic import ValidationError

from app.core.config import settings
from app.schemas.category import CategoryIndexQuery
from app.schemas.enums import CategoryFieldsEnum, CategorySortFieldsEnum, SortOrderEnum

MAX_POSTGRES_INT = 2147483647

# Query parameter dependencies for common validations
CategoryIdParam = Query(None, ge=1, le=MAX_POSTGRES_INT, description="Category ID filter")
NameParam = Query(None, min_length=1, max_length=255, description="Substring of the name")
CreatedAtParam = Query(
    None, description="Inclusive created_at range; pass start and end"
)
PageParam = Query(1, ge=1, le=100000, description="1-based page number")
PerPageParam = Query(
    settings.CATEGORY_PER_PAGE,
    ge=1,
    le=settings.CATEGORY_MAX_PER_PAGE,
    description="Items per page",
)


def category_index_query(
    id: Optional[int] = CategoryIdParam,
    name: Optional[str] = NameParam,
    created_at: Optional[List[datetime]] = CreatedAtParam,
    sort_by: Optional[CategorySortFieldsEnum] = None,
    sort_order: Optional[SortOrderEnum] = None,
    page: int = PageParam,
    per_page: int = PerPageParam,
    fields: Optional[List[CategoryFieldsEnum]] = Query(None),
    expand: Optional[List[str]] = Query(None),
    inertia: Optional[str] = None,
) -> CategoryIndexQuery:
    """Collect listing parameters; the created_at range needs exactly two bounds."""
    try:
        return CategoryIndexQuery(
            id=id,
            name=name,
            created_at=created_at,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            per_page=per_page,
            fields=fields or [],
            expand=expand or [],
            inertia=inertia,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=[
                {"loc": ["query", *error["loc"]], "msg": error["msg"]}
                for error in e.errors()
            ],
        )
