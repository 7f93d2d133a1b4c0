"""
FastAPI dependency providers for the category layers.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.repositories import CategoryRepository
from app.services.category_service import CategoryService


def get_category_repository(db: Session = Depends(get_db)) -> CategoryRepository:
    return CategoryRepository(db)


def get_category_service(
    repository: CategoryRepository = Depends(get_category_repository),
) -> CategoryService:
    return CategoryService(repository)
