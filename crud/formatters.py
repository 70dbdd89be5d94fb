"""Human readable, HTML safe rendering of single values.

Every function here returns a ``SafeString``: user supplied content is always
escaped before it is marked safe.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.conf import settings
from django.utils import timezone
from django.utils.html import conditional_escape, escape, linebreaks
from django.utils.safestring import mark_safe
from django.utils.text import capfirst
from django.utils.translation import gettext

from .columns import ColumnType, get_model_field


def empty_string():
    """The safe string shown for missing values, from ``DRY_CRUD_EMPTY_STRING``."""
    return mark_safe(getattr(settings, "DRY_CRUD_EMPTY_STRING", ""))


TWO_PLACES = Decimal("0.01")
CAPTION_SEPARATOR = re.compile(r"[\W_]+")


def _format_boolean(value):
    return escape(gettext("yes") if value else gettext("no"))


def _format_integer(value):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return _format_string(value)
    return escape(f"{number:,}")


def _format_number(value):
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return _format_string(value)
    if not number.is_finite():
        return _format_string(value)
    return escape(f"{number.quantize(TWO_PLACES, rounding=ROUND_HALF_UP):f}")


def _format_date(value):
    if not hasattr(value, "strftime"):
        return _format_string(value)
    return escape(value.strftime("%Y-%m-%d"))


def _format_time(value):
    if not hasattr(value, "strftime"):
        return _format_string(value)
    return escape(value.strftime("%H:%M"))


def _format_datetime(value):
    if not hasattr(value, "strftime"):
        return _format_string(value)
    if isinstance(value, datetime) and timezone.is_aware(value):
        value = timezone.localtime(value)
    return escape(value.strftime("%Y-%m-%d %H:%M"))


def _format_text(value):
    return mark_safe(linebreaks(str(value), autoescape=True))


def _format_string(value):
    return conditional_escape(value)


FORMATTERS = {
    ColumnType.BOOLEAN: _format_boolean,
    ColumnType.INTEGER: _format_integer,
    ColumnType.FLOAT: _format_number,
    ColumnType.DECIMAL: _format_number,
    ColumnType.DATE: _format_date,
    ColumnType.TIME: _format_time,
    ColumnType.DATETIME: _format_datetime,
    ColumnType.TEXT: _format_text,
    ColumnType.STRING: _format_string,
}


def format_value(value, column_type=None):
    """Format ``value`` according to ``column_type``.

    Without a type (or with ``ColumnType.NONE``) the type is inferred from the
    value itself. ``None`` always renders as ``empty_string()``.
    """
    if value is None:
        return empty_string()
    column_type = _coerce(column_type)
    if column_type is ColumnType.NONE:
        column_type = ColumnType.for_value(value)
    formatter = FORMATTERS.get(column_type, _format_string)
    return formatter(value)


def _coerce(column_type):
    if column_type is None:
        return ColumnType.NONE
    try:
        return ColumnType(column_type)
    except ValueError:
        # unknown tags use the string rule
        return ColumnType.STRING


def captionize(text, model=None):
    """Turn an identifier into a title cased caption.

    When ``model`` is a Django model (class or instance) that has a field
    named ``text``, the field's verbose name is used instead.
    """
    field = get_model_field(model, text) if model is not None else None
    if field is not None and getattr(field, "verbose_name", None):
        return escape(capfirst(str(field.verbose_name)))
    words = [word.capitalize() for word in CAPTION_SEPARATOR.split(str(text)) if word]
    return escape(" ".join(words))
