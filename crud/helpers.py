"""The standard view helper used by generic list and CRUD screens.

``StandardHelper`` bundles value formatting, labeled fields, alternating
rows, tables, forms and translations. A helper is created per request (or
per template render), since ``tr_alt`` keeps the row cycle on the instance.

Custom rendering of a single attribute is added by subclassing and defining
``format_<attr>(self, obj)``::

    class EntryHelper(StandardHelper):
        def format_size(self, obj):
            return f"{self.f(len(obj))} chars"
"""

from __future__ import annotations

from itertools import cycle
from typing import Callable, Optional

from django.middleware.csrf import get_token
from django.utils.html import format_html

from . import formatters
from .columns import belongs_to_field, column_value
from .columns import column_type as reflect_column_type
from .form_builder import StandardFormBuilder
from .table_builder import StandardTableBuilder
from .translations import (
    Resolver,
    association_scopes,
    inheritable_scopes,
    translate,
    translation_scopes,
)

ROW_CLASSES = ("even", "odd")
# attribute names that would resolve to the helper's own format_* methods
HELPER_FORMATS = frozenset(("attr", "type", "assoc"))


class StandardHelper:

    def __init__(self, view=None, action_name: Optional[str] = None, resolver: Optional[Resolver] = None, request=None):
        self.view = view
        self.action_name = action_name or getattr(view, "action_name", None)
        self.resolver = resolver
        self.request = request if request is not None else getattr(view, "request", None)
        self._row_classes = cycle(ROW_CLASSES)

    # formatting

    def f(self, value):
        """Format any value as a safe, human readable string."""
        return formatters.format_value(value)

    def format_attr(self, obj, attr):
        """Format the attribute ``attr`` of ``obj``.

        A ``format_<attr>`` method on the helper wins, then foreign keys are
        rendered through ``format_assoc`` and everything else by column type.
        """
        custom = None if attr in HELPER_FORMATS else getattr(self, f"format_{attr}", None)
        if custom is not None:
            return custom(obj)
        field = belongs_to_field(obj, attr)
        if field is not None:
            return self.format_assoc(obj, field)
        return self.format_type(obj, attr)

    def format_type(self, obj, attr):
        value = getattr(obj, str(attr))
        if callable(value):
            value = value()
        return formatters.format_value(column_value(obj, attr, value), reflect_column_type(obj, attr))

    def format_assoc(self, obj, field):
        related = getattr(obj, field.name)
        if related is None:
            return formatters.format_value(self.ta("no_entry", field))
        if hasattr(related, "get_absolute_url"):
            return format_html('<a href="{}">{}</a>', related.get_absolute_url(), str(related))
        return formatters.format_value(str(related))

    def column_type(self, obj, attr):
        return reflect_column_type(obj, attr)

    def captionize(self, text, model=None):
        return formatters.captionize(text, model)

    # markup

    def labeled(self, label, content=None):
        """Render ``label`` and ``content`` as a caption/value pair.

        ``content`` may be a callable returning the content.
        """
        if callable(content):
            content = content()
        if content is None or content == "":
            content = formatters.empty_string()
        return format_html(
            '<div class="labeled"><div class="caption">{}</div><div class="value">{}</div></div>',
            label,
            content,
        )

    def labeled_attr(self, obj, attr):
        return self.labeled(self.captionize(attr, obj), self.format_attr(obj, attr))

    def tr_alt(self, content=None):
        """Render a table row, alternating the ``even`` and ``odd`` classes."""
        if callable(content):
            content = content()
        return format_html('<tr class="{}">{}</tr>', next(self._row_classes), content or "")

    def table(self, entries, *attrs, build: Optional[Callable] = None, **html_options):
        """Render ``entries`` as a table with a column per attribute.

        Additional columns are defined by ``build``, which receives the
        ``StandardTableBuilder``. Without entries a message is rendered.
        """
        entries = list(entries)
        if not entries:
            return format_html('<div class="list">{}</div>', self.ti("no_list_entries"))

        def build_columns(builder):
            builder.attrs(*attrs)
            if build is not None:
                build(builder)

        return StandardTableBuilder.table(entries, self, build_columns, **html_options)

    def form_builder(self, entry, *attrs, data=None, files=None, prefix=None):
        return StandardFormBuilder(entry, attrs, data=data, files=files, prefix=prefix, helper=self)

    def standard_form(self, entry, *attrs, data=None, files=None, prefix=None, **options):
        """Render a create/update form for ``attrs`` of ``entry``.

        ``options`` are passed to ``StandardFormBuilder.render``: ``url``,
        ``submit_label``, ``cancel_url`` and ``html`` attributes of the form.
        """
        builder = self.form_builder(entry, *attrs, data=data, files=files, prefix=prefix)
        return self.render_form(builder, **options)

    def render_form(self, builder, **options):
        if self.request is not None and "csrf_input" not in options:
            options["csrf_input"] = format_html(
                '<input type="hidden" name="csrfmiddlewaretoken" value="{}">',
                get_token(self.request),
            )
        return builder.render(**options)

    # translations

    def ti(self, key, default=None, **interpolations):
        """Translate ``key``, inheriting along the view class hierarchy."""
        scopes = inheritable_scopes(translation_scopes(self.view), self.action_name)
        return translate(key, scopes, self.resolver, default, **interpolations)

    def ta(self, key, field=None, default=None, **interpolations):
        """Translate ``key`` for the association ``field``."""
        return translate(key, association_scopes(field), self.resolver, default, **interpolations)
