from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from typing import Any, Dict
import logging
from app.api.validation import category_index_query
from app.core.dependencies import get_category_service
from app.core.exceptions import CategoryNotFoundError
from app.core.flash import flash_error, flash_success, pop_flash
from app.schemas.category import (
    Category as CategorySchema,
    CategoryCreate,
    CategoryIndexQuery,
    CategoryUpdate,
)
from app.schemas.enums import CategorySortFieldsEnum
from app.services.category_service import CategoryService
from app.services.category_view import index_page, serialize_page

router = APIRouter()
logger = logging.getLogger(__name__)

INDEX_ROUTE = "categories.index"


def _redirect_to_index(request: Request) -> RedirectResponse:
    # 303 so the browser follows PUT/DELETE redirects with a GET
    return RedirectResponse(url=request.url_for(INDEX_ROUTE), status_code=303)


@router.get("/", name=INDEX_ROUTE)
def list_categories(
    request: Request,
    query: CategoryIndexQuery = Depends(category_index_query),
    service: CategoryService = Depends(get_category_service),
) -> Dict[str, Any]:
    """
    List categories with filters, sorting and pagination.

    With inertia=disabled the raw page is returned, always sorted by name.
    Otherwise the response is the page object for the listing screen: the
    page, the filter bar description and any pending flash message.
    """
    if query.wants_raw_listing:
        query = query.model_copy(update={"sort_by": CategorySortFieldsEnum.NAME})
        return serialize_page(service.get_all(query), request, query)

    page = service.get_all(query)
    return index_page(request, page, query, flash=pop_flash(request))


@router.get("/{category_id}", response_model=CategorySchema)
def get_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service),
):
    """Get a single category."""
    try:
        return service.find_or_fail(category_id)
    except CategoryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/")
def create_category(
    request: Request,
    payload: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
):
    """Create a category and redirect to the listing with the outcome."""
    try:
        service.create(payload)
        flash_success(request, "Category created successfully.")
    except Exception as e:
        flash_error(request, "Category creation failed!")
        logger.exception("Category creation failed!", extra={"error": str(e)})

    return _redirect_to_index(request)


@router.api_route("/{category_id}", methods=["PUT", "PATCH"])
def update_category(
    request: Request,
    category_id: int,
    payload: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
):
    """Update a category and redirect to the listing with the outcome."""
    try:
        service.update(category_id, payload)
        flash_success(request, "Category updated successfully.")
    except CategoryNotFoundError as e:
        flash_error(request, str(e))
    except Exception as e:
        flash_error(request, "Category update failed!")
        logger.exception("Category update failed!", extra={"error": str(e)})

    return _redirect_to_index(request)


@router.delete("/{category_id}")
def delete_category(
    request: Request,
    category_id: int,
    service: CategoryService = Depends(get_category_service),
):
    """Delete a category and redirect to the listing with the outcome."""
    try:
        service.delete(category_id)
        flash_success(request, "Category deleted successfully.")
    except CategoryNotFoundError as e:
        flash_error(request, str(e))
    except Exception as e:
        flash_error(request, "Category deletion failed!")
        logger.exception("Category deletion failed!", extra={"error": str(e)})

    return _redirect_to_index(request)
