"""Column type tags and their reflection from Django model fields."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Optional

from django.core.exceptions import FieldDoesNotExist, ValidationError


class ColumnType(str, Enum):
    """Semantic type of a value, used to pick its formatting rule."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    TEXT = "text"
    NONE = "none"

    @classmethod
    def for_value(cls, value) -> "ColumnType":
        """Infer the tag of a plain Python value."""
        if value is None:
            return cls.NONE
        # bool is an int subclass, datetime a date subclass
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, int):
            return cls.INTEGER
        if isinstance(value, float):
            return cls.FLOAT
        if isinstance(value, Decimal):
            return cls.DECIMAL
        if isinstance(value, datetime):
            return cls.DATETIME
        if isinstance(value, date):
            return cls.DATE
        if isinstance(value, time):
            return cls.TIME
        return cls.STRING


INTERNAL_TYPES = {
    "CharField": ColumnType.STRING,
    "SlugField": ColumnType.STRING,
    "EmailField": ColumnType.STRING,
    "URLField": ColumnType.STRING,
    "UUIDField": ColumnType.STRING,
    "GenericIPAddressField": ColumnType.STRING,
    "FilePathField": ColumnType.STRING,
    "FileField": ColumnType.STRING,
    "ImageField": ColumnType.STRING,
    "IntegerField": ColumnType.INTEGER,
    "SmallIntegerField": ColumnType.INTEGER,
    "BigIntegerField": ColumnType.INTEGER,
    "PositiveIntegerField": ColumnType.INTEGER,
    "PositiveSmallIntegerField": ColumnType.INTEGER,
    "PositiveBigIntegerField": ColumnType.INTEGER,
    "AutoField": ColumnType.INTEGER,
    "SmallAutoField": ColumnType.INTEGER,
    "BigAutoField": ColumnType.INTEGER,
    "FloatField": ColumnType.FLOAT,
    "DecimalField": ColumnType.DECIMAL,
    "DateField": ColumnType.DATE,
    "TimeField": ColumnType.TIME,
    "DateTimeField": ColumnType.DATETIME,
    "BooleanField": ColumnType.BOOLEAN,
    "NullBooleanField": ColumnType.BOOLEAN,
    "TextField": ColumnType.TEXT,
}


def model_meta(obj):
    """Return the ``_meta`` options of a model class or instance, if any."""
    meta = getattr(obj, "_meta", None)
    return meta if hasattr(meta, "get_field") else None


def _is_single_relation(field):
    return bool(field.many_to_one or field.one_to_one)


def get_model_field(obj, attr: str):
    meta = model_meta(obj)
    if meta is None:
        return None
    try:
        return meta.get_field(str(attr))
    except FieldDoesNotExist:
        return None


def belongs_to_field(obj, attr: str):
    """Return the foreign key field named ``attr`` (by name, not attname)."""
    field = get_model_field(obj, attr)
    if field is None or not field.is_relation or not getattr(field, "concrete", False):
        return None
    if _is_single_relation(field) and field.name == str(attr):
        return field
    return None


def field_column_type(field) -> ColumnType:
    if field.is_relation:
        # reached through the attname, so the raw key value is shown
        field = field.target_field
    return INTERNAL_TYPES.get(field.get_internal_type(), ColumnType.STRING)


def column_type(obj, attr: str) -> Optional[ColumnType]:
    """Return the column type of ``attr`` on a model, or ``None``.

    Non-model objects, unknown attributes, reverse relations and foreign keys
    accessed by their name have no column type.
    """
    field = get_model_field(obj, attr)
    if field is None or not getattr(field, "concrete", False):
        return None
    if field.is_relation:
        if not _is_single_relation(field) or field.attname != str(attr):
            return None
    return field_column_type(field)


def column_value(obj, attr: str, value):
    """Convert ``value`` of column ``attr`` to the field's Python type.

    Unsaved model instances keep whatever was assigned, e.g. ``"1910-01-01"``
    for a date field. Values the field rejects are returned unchanged.
    """
    if value is None or column_type(obj, attr) is None:
        return value
    field = get_model_field(obj, attr)
    if field.is_relation:
        field = field.target_field
    try:
        return field.to_python(value)
    except ValidationError:
        return value
