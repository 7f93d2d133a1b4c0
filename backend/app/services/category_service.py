"""Category business logic between the HTTP layer and the repository."""

import logging
from typing import Any, Dict, Optional

from app.core.exceptions import CategoryNotFoundError
from app.models.category import Category
from app.repositories import CategoryRepository, LengthAwarePage
from app.schemas.category import CategoryCreate, CategoryIndexQuery, CategoryUpdate
from app.schemas.enums import CategoryFiltersEnum, CategorySortFieldsEnum, SortOrderEnum

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Orchestrates category operations.

    Filters and pagination pass straight through to the repository; missing
    records surface as CategoryNotFoundError.
    """

    def __init__(self, repository: CategoryRepository):
        self.repository = repository

    def get_all(self, query: CategoryIndexQuery) -> LengthAwarePage[Category]:
        return self.repository.get_all(
            page=query.page,
            per_page=query.per_page,
            filters=query.filters(),
            fields=[field.value for field in query.fields],
            expand=query.expand,
            sort_by=(query.sort_by or CategorySortFieldsEnum.ID).value,
            sort_order=(query.sort_order or SortOrderEnum.ASC).value,
        )

    def exists(self, filters: Dict[str, Any]) -> bool:
        return self.repository.exists(filters)

    def find(self, category_id: int) -> Optional[Category]:
        return self.repository.find({CategoryFiltersEnum.ID.value: category_id})

    def find_or_fail(self, category_id: int) -> Category:
        category = self.find(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    def create(self, payload: CategoryCreate) -> Category:
        return self.repository.create(payload.model_dump())

    def update(self, category_id: int, payload: CategoryUpdate) -> Category:
        category = self.find_or_fail(category_id)
        return self.repository.update(category, payload.model_dump(exclude_unset=True))

    def delete(self, category_id: int) -> Optional[bool]:
        """
        Delete a category by id.

        A False outcome means the row disappeared between lookup and delete,
        which is reported as not found. An indeterminate (None) outcome is
        passed through after a warning.
        """
        category = self.find_or_fail(category_id)
        deleted = self.repository.delete(category)
        if deleted is False:
            raise CategoryNotFoundError(category_id)
        if deleted is None:
            logger.warning(f"Delete of category {category_id} returned no row count")
        return deleted
