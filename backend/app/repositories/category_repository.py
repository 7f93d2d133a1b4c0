"""
Category repository: filtered listing, lookups and guarded writes.
"""
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import inspect, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, load_only, selectinload
from tenacity import (
    RetryError,
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.core.config import settings
from app.core.exceptions import (
    CategoryNotFoundError,
    CategoryUpdateConflictError,
    DBCommitError,
    RetryExhaustedError,
)
from app.models.category import Category
from app.repositories.pagination import LengthAwarePage, paginate
from app.schemas.enums import (
    CategoryFieldsEnum,
    CategoryFiltersEnum,
    CategorySortFieldsEnum,
    SortOrderEnum,
)

logger = logging.getLogger(__name__)

# (filter key, clause factory); a clause is added only when its key is set
FILTER_CLAUSES: Tuple[Tuple[CategoryFiltersEnum, Callable[[Any], Any]], ...] = (
    (CategoryFiltersEnum.ID, lambda value: Category.id == value),
    (
        CategoryFiltersEnum.NAME,
        lambda value: Category.name.contains(value, autoescape=True),
    ),
    (
        CategoryFiltersEnum.CREATED_AT,
        lambda value: Category.created_at.between(value[0], value[1]),
    ),
)


class CategoryRepository:
    """Repository for category CRUD operations."""

    MAX_RETRY = 5

    def __init__(
        self,
        db: Session,
        max_retry: Optional[int] = None,
        backoff_multiplier: Optional[float] = None,
        backoff_max: Optional[float] = None,
    ):
        self.db = db
        self.max_retry = (
            settings.CATEGORY_UPDATE_MAX_RETRY if max_retry is None else max_retry
        )
        self.backoff_multiplier = (
            settings.CATEGORY_UPDATE_BACKOFF_MULTIPLIER
            if backoff_multiplier is None
            else backoff_multiplier
        )
        self.backoff_max = (
            settings.CATEGORY_UPDATE_BACKOFF_MAX if backoff_max is None else backoff_max
        )

    def get_all(
        self,
        page: int,
        per_page: int,
        filters: Optional[Dict[str, Any]] = None,
        fields: Sequence[str] = (),
        expand: Sequence[str] = (),
        sort_by: str = CategorySortFieldsEnum.ID.value,
        sort_order: str = SortOrderEnum.ASC.value,
    ) -> LengthAwarePage[Category]:
        """
        Return one page of categories matching every supplied filter.

        Args:
            page: 1-based page number
            per_page: Page size
            filters: Subset of id / name / created_at; absent keys are ignored
            fields: Columns to load; empty loads all of them
            expand: Relationships to eager load
            sort_by: Column to order by
            sort_order: "asc" or "desc"
        """
        sort_column = getattr(Category, CategorySortFieldsEnum(sort_by).value)
        if SortOrderEnum(sort_order) == SortOrderEnum.DESC:
            ordering = [sort_column.desc(), Category.id.desc()]
        else:
            ordering = [sort_column.asc(), Category.id.asc()]

        query = self._with_expand(self._get_query(filters or {}), expand)
        query = query.order_by(*ordering)

        if fields:
            columns = [getattr(Category, CategoryFieldsEnum(f).value) for f in fields]
            query = query.options(load_only(*columns))

        return paginate(query, page=page, per_page=per_page)

    def exists(self, filters: Optional[Dict[str, Any]] = None) -> bool:
        """Check whether at least one live category matches the filters."""
        return self.db.query(self._get_query(filters or {}).exists()).scalar()

    def find(
        self, filters: Optional[Dict[str, Any]] = None, expand: Sequence[str] = ()
    ) -> Optional[Category]:
        """Return the first matching category, or None."""
        query = self._with_expand(self._get_query(filters or {}), expand)
        return query.order_by(Category.id).first()

    def create(self, payload: Dict[str, Any]) -> Category:
        """Insert a category inside a transaction; roll back on any failure."""
        try:
            category = Category(**payload)
            self.db.add(category)
            self.db.commit()
        except Exception as exc:
            self.db.rollback()
            raise DBCommitError(exc) from exc

        self.db.refresh(category)
        logger.info(f"Created category: {category.id} - {category.name}")
        return category

    def update(self, category: Category, changes: Dict[str, Any]) -> Category:
        """
        Apply changes with an optimistic version check.

        A write that matches no row means another writer bumped the version
        first. The row is re-read and the write retried with capped
        exponential backoff. Other database errors are not retried.

        Raises:
            CategoryNotFoundError: The category was deleted meanwhile
            RetryExhaustedError: Every attempt conflicted
        """
        retrying = Retrying(
            stop=stop_after_attempt(self.max_retry),
            wait=wait_exponential(multiplier=self.backoff_multiplier, max=self.backoff_max),
            retry=retry_if_exception_type(CategoryUpdateConflictError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )
        try:
            for attempt in retrying:
                with attempt:
                    if not self._write_changes(category, changes):
                        self._reload(category)
                        raise CategoryUpdateConflictError(category.id, category.version)
        except RetryError as exc:
            raise RetryExhaustedError(category.id, self.max_retry) from exc

        self.db.refresh(category)
        logger.info(f"Updated category: {category.id} (version {category.version})")
        return category

    def delete(self, category: Category) -> Optional[bool]:
        """
        Tombstone a category.

        Returns:
            True if this call deleted it, False if no live row matched, None
            if the driver could not report the affected row count.
        """
        stmt = (
            update(Category)
            .where(Category.id == category.id, Category.deleted_at.is_(None))
            .values(deleted_at=datetime.utcnow(), version=Category.version + 1)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        if result.rowcount is None or result.rowcount < 0:
            return None
        if result.rowcount == 0:
            return False

        self.db.expire(category)
        logger.info(f"Deleted category: {category.id}")
        return True

    def _write_changes(self, category: Category, changes: Dict[str, Any]) -> bool:
        """Conditional UPDATE guarded by the version the caller last saw."""
        stmt = (
            update(Category)
            .where(
                Category.id == category.id,
                Category.version == category.version,
                Category.deleted_at.is_(None),
            )
            .values(
                **changes,
                version=Category.version + 1,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            if result.rowcount != 1:
                self.db.rollback()
                return False
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return True

    def _reload(self, category: Category) -> None:
        """Refresh the in-memory version; fail fast if the row is gone."""
        self.db.refresh(category)
        if category.deleted_at is not None:
            raise CategoryNotFoundError(category.id)

    def _with_expand(self, query: Query, expand: Sequence[str]) -> Query:
        relationships = inspect(Category).relationships
        for relation in expand:
            if relation not in relationships:
                raise ValueError(f"Unknown category relation: {relation}")
            query = query.options(selectinload(getattr(Category, relation)))
        return query

    def _get_query(self, filters: Dict[str, Any]) -> Query:
        query = self.db.query(Category).filter(Category.deleted_at.is_(None))
        for key, clause in FILTER_CLAUSES:
            value = filters.get(key.value)
            if value is not None:
                query = query.filter(clause(value))
        return query
