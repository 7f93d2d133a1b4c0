from app.schemas.category import (
    Category,
    CategoryCreate,
    CategoryUpdate,
    CategoryIndexQuery,
    CategoryPage,
    FilterField,
    FilterOption,
)
from app.schemas.enums import (
    CategoryFieldsEnum,
    CategoryFiltersEnum,
    CategorySortFieldsEnum,
    SortOrderEnum,
    FilterFieldTypeEnum,
)

__all__ = [
    "Category",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryIndexQuery",
    "CategoryPage",
    "FilterField",
    "FilterOption",
    "CategoryFieldsEnum",
    "CategoryFiltersEnum",
    "CategorySortFieldsEnum",
    "SortOrderEnum",
    "FilterFieldTypeEnum",
]
