from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy import inspect

from app.core.config import settings
from app.models.category import Category as CategoryModel
from app.schemas.enums import (
    CategoryFieldsEnum,
    CategoryFiltersEnum,
    CategorySortFieldsEnum,
    SortOrderEnum,
)


class CategoryBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v):
        if v is None:
            raise ValueError("name may be omitted but not null")
        return v


class Category(CategoryBase):
    id: int
    version: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CategoryIndexQuery(BaseModel):
    """Validated listing request: filters, sort, pagination and shaping."""

    id: Optional[int] = None
    name: Optional[str] = None
    created_at: Optional[List[datetime]] = None
    sort_by: Optional[CategorySortFieldsEnum] = None
    sort_order: Optional[SortOrderEnum] = None
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=settings.CATEGORY_PER_PAGE, ge=1)
    fields: List[CategoryFieldsEnum] = Field(default_factory=list)
    expand: List[str] = Field(default_factory=list)
    inertia: Optional[str] = None

    @field_validator("created_at")
    @classmethod
    def created_at_is_range(cls, v):
        if v is not None and len(v) != 2:
            raise ValueError("created_at expects exactly two bounds: start and end")
        return v

    @field_validator("expand")
    @classmethod
    def expand_known_relations(cls, v):
        known = set(inspect(CategoryModel).relationships.keys())
        unknown = [relation for relation in v if relation not in known]
        if unknown:
            raise ValueError(f"Unknown relations: {', '.join(unknown)}")
        return v

    @property
    def wants_raw_listing(self) -> bool:
        return self.inertia == "disabled"

    def filters(self) -> Dict[str, Any]:
        """Only the filter keys that were actually supplied."""
        values = self.model_dump(include=set(CategoryFiltersEnum.values()))
        return {key: value for key, value in values.items() if value is not None}


class CategoryPage(BaseModel):
    """Length-aware page of categories with navigation links."""

    model_config = ConfigDict(populate_by_name=True)

    data: List[Dict[str, Any]]
    current_page: int
    per_page: int
    total: int
    last_page: int
    from_: Optional[int] = Field(default=None, alias="from")
    to: Optional[int] = None
    path: str
    query: Dict[str, Any]
    first_page_url: str
    last_page_url: str
    prev_page_url: Optional[str] = None
    next_page_url: Optional[str] = None


class FilterOption(BaseModel):
    label: str
    value: str


class FilterField(BaseModel):
    """Describes one filter input on the listing page."""

    label: str
    placeholder: str
    type: str
    value: Any = ""
    options: Optional[List[FilterOption]] = None
