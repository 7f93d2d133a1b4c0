"""
Repositories module.
"""
from .pagination import LengthAwarePage, paginate
from .category_repository import CategoryRepository

__all__ = [
    "LengthAwarePage",
    "paginate",
    "CategoryRepository",
]
