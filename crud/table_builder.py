"""Column based rendering of entry lists as HTML tables."""

from __future__ import annotations

from typing import Callable, List, Optional

from django.conf import settings
from django.forms.utils import flatatt
from django.utils.html import conditional_escape, format_html, format_html_join
from django.utils.http import urlencode
from django.utils.safestring import mark_safe

from .formatters import captionize


def next_direction(sorted_by, direction, attr):
    """Direction the header link of ``attr`` sorts in.

    The column the list is currently sorted by flips its direction, any other
    column starts ascending.
    """
    if sorted_by != attr:
        return "asc"
    return "desc" if direction == "asc" else "asc"


class Col:
    """A single table column: a header and a callable rendering each cell."""

    def __init__(self, header, content: Callable, html_options: Optional[dict] = None):
        self.header = header
        self.content = content
        self.html_options = html_options or {}

    def html_header(self):
        return format_html("<th{}>{}</th>", flatatt(self.html_options), self.header)

    def html_cell(self, entry):
        return format_html("<td{}>{}</td>", flatatt(self.html_options), self.content(entry))


class StandardTableBuilder:
    """Builds a table for ``entries`` column by column.

    Cells of attribute columns are rendered with the helper's ``format_attr``
    and rows alternate through the helper's ``tr_alt``::

        StandardTableBuilder.table(entries, helper, lambda t: t.attrs("name", "children"))
    """

    def __init__(self, entries, helper, **html_options):
        self.entries = list(entries)
        self.helper = helper
        self.cols: List[Col] = []
        self.html_options = html_options
        self.html_options.setdefault("class", getattr(settings, "DRY_CRUD_TABLE_CLASS", "list"))

    @classmethod
    def table(cls, entries, helper, build: Optional[Callable] = None, **html_options):
        builder = cls(entries, helper, **html_options)
        if build is not None:
            build(builder)
        return builder.to_html()

    def col(self, header="", content: Optional[Callable] = None, **html_options):
        self.cols.append(Col(header, content or (lambda entry: ""), html_options))

    def attrs(self, *attrs):
        for attr in attrs:
            self.attr(attr)

    def attr(self, attr, header=None, **html_options):
        if header is None:
            header = self.attr_header(attr)
        self.col(header, lambda entry: self.helper.format_attr(entry, attr), **html_options)

    def sortable_attr(self, attr, current_sort=None, current_dir=None, header=None, **html_options):
        """Add an attribute column whose header links to the next sort order."""
        if header is None:
            header = self.attr_header(attr)
        query = urlencode({"sort": attr, "sort_dir": next_direction(current_sort, current_dir, attr)})
        link = format_html('<a href="?{}">{}</a>', query, header)
        self.attr(attr, link, **html_options)

    def attr_header(self, attr):
        return captionize(attr, self.entry_class())

    def entry_class(self):
        if not self.entries:
            return None
        return type(self.entries[0])

    def to_html(self):
        header = format_html("<tr>{}</tr>", mark_safe("".join(col.html_header() for col in self.cols)))
        rows = format_html_join("", "{}", ((self.html_row(entry),) for entry in self.entries))
        return format_html("<table{}>{}{}</table>", flatatt(self.html_options), header, rows)

    def html_row(self, entry):
        cells = mark_safe("".join(conditional_escape(col.html_cell(entry)) for col in self.cols))
        return self.helper.tr_alt(cells)
