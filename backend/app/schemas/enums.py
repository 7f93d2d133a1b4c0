"""
Closed enumerations for category filtering, sorting and projection.

Each member carries its display label so the listing page can describe its
filter inputs without separate lookup tables.
"""
from enum import Enum
from typing import Dict, List


class LabeledEnum(str, Enum):
    """String enum whose members carry a human readable label."""

    def __new__(cls, value: str, label: str):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.label = label
        return obj

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def choices(cls) -> Dict[str, str]:
        """Map of value to label."""
        return {member.value: member.label for member in cls}

    @classmethod
    def options(cls) -> List[Dict[str, str]]:
        """Label/value pairs for static select inputs."""
        return [{"label": label, "value": value} for value, label in cls.choices().items()]


class CategoryFieldsEnum(LabeledEnum):
    """Columns a listing may project."""
    ID = ("id", "ID")
    NAME = ("name", "Name")
    VERSION = ("version", "Version")
    CREATED_AT = ("created_at", "Created at")
    UPDATED_AT = ("updated_at", "Updated at")


class CategoryFiltersEnum(LabeledEnum):
    ID = ("id", "ID")
    NAME = ("name", "Name")
    CREATED_AT = ("created_at", "Created at")


class CategorySortFieldsEnum(LabeledEnum):
    ID = ("id", "ID")
    NAME = ("name", "Name")
    CREATED_AT = ("created_at", "Created at")


class SortOrderEnum(LabeledEnum):
    ASC = ("asc", "Ascending")
    DESC = ("desc", "Descending")


class FilterFieldTypeEnum(LabeledEnum):
    STRING = ("string", "Text")
    SELECT_STATIC = ("select_static", "Static select")
