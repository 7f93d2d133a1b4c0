"""
Exceptions raised by the category repository and service layers.
"""


class CategoryError(Exception):
    """Base exception for category operations."""
    pass


class CategoryNotFoundError(CategoryError):
    """Raised when a category does not exist (or has been deleted)."""
    def __init__(self, category_id):
        self.category_id = category_id
        super().__init__(f"Category not found: {category_id}")


class DBCommitError(CategoryError):
    """Raised when a write transaction fails and has been rolled back."""
    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Database commit failed: {cause}")


class CategoryUpdateConflictError(CategoryError):
    """A conditional update matched no row because the version moved on."""
    def __init__(self, category_id, version: int):
        self.category_id = category_id
        self.version = version
        super().__init__(
            f"Category {category_id} changed concurrently (expected version {version})"
        )


class RetryExhaustedError(CategoryError):
    """Raised when an update keeps conflicting after the maximum attempts."""
    def __init__(self, category_id, attempts: int):
        self.category_id = category_id
        self.attempts = attempts
        super().__init__(
            f"Max retry exceeded during category update ({attempts} attempts)"
        )
