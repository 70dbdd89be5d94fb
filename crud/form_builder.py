"""Generation of standard create/update forms for model entries."""

from __future__ import annotations

import logging
from datetime import date

from django import forms
from django.conf import settings
from django.forms.models import modelform_factory
from django.forms.utils import flatatt
from django.forms.widgets import SelectDateWidget
from django.urls import reverse
from django.utils.html import format_html, format_html_join
from django.utils.safestring import mark_safe
from django.utils.translation import ngettext

from .columns import ColumnType, column_type
from .formatters import captionize
from .translations import inheritable_scopes, translate

logger = logging.getLogger(__name__)


def _merge_attrs(defaults: dict, overrides: dict) -> dict:
    """Attributes of the form tag. ``overrides`` win, CSS classes accumulate."""
    merged = {**defaults, **overrides}
    classes = " ".join(filter(None, (defaults.get("class"), overrides.get("class"))))
    if classes:
        merged["class"] = classes
    return merged


def date_years():
    years = getattr(settings, "DRY_CRUD_DATE_YEARS", None)
    if years is None:
        years = range(1900, date.today().year + 10)
    return years


def widget_for(field_type):
    """Return the input widget for a column type, or ``None`` for the default."""
    if field_type == ColumnType.DATE:
        return SelectDateWidget(years=date_years())
    if field_type == ColumnType.TIME:
        return forms.TimeInput(format="%H:%M")
    if field_type == ColumnType.DATETIME:
        return forms.DateTimeInput(format="%Y-%m-%d %H:%M")
    if field_type in (ColumnType.INTEGER, ColumnType.FLOAT, ColumnType.DECIMAL):
        return forms.NumberInput()
    if field_type == ColumnType.TEXT:
        return forms.Textarea(attrs={"rows": 5})
    if field_type == ColumnType.BOOLEAN:
        return forms.CheckboxInput()
    return None


class StandardFormBuilder:
    """Builds, validates and renders a form for ``attrs`` of ``entry``.

    Inputs are chosen from the model's column types. Errors of a bound form
    are listed in an error explanation and each invalid input is wrapped in a
    ``field_with_errors`` div.
    """

    def __init__(self, entry, attrs, data=None, files=None, prefix=None, helper=None):
        self.entry = entry
        self.attrs = [str(attr) for attr in attrs]
        self.helper = helper
        self.form = self.form_class()(data=data, files=files, instance=entry, prefix=prefix)

    def form_class(self):
        widgets = {}
        for attr in self.attrs:
            widget = widget_for(column_type(self.entry, attr))
            if widget is not None:
                widgets[attr] = widget
        return modelform_factory(type(self.entry), fields=self.attrs, widgets=widgets)

    @property
    def model_name(self):
        return self.entry._meta.model_name

    def is_valid(self):
        valid = self.form.is_valid()
        if not valid:
            logger.debug(f"Invalid {self.model_name} submission: {sorted(self.form.errors)}")
        return valid

    def save(self, commit=True):
        return self.form.save(commit=commit)

    def default_url(self):
        if self.entry.pk is not None:
            return reverse(f"{self.model_name}_update", args=[self.entry.pk])
        return reverse(f"{self.model_name}_create")

    def translate(self, key, **interpolations):
        if self.helper is not None:
            return self.helper.ti(key, **interpolations)
        return translate(key, inheritable_scopes([]), **interpolations)

    def render(self, url=None, submit_label=None, cancel_url=None, html=None, csrf_input=""):
        attrs = _merge_attrs({"action": url or self.default_url(), "method": "post"}, html or {})
        if self.form.is_multipart():
            attrs["enctype"] = "multipart/form-data"
        body = [
            self.error_messages(),
            mark_safe("".join(self.labeled_input_field(attr) for attr in self.attrs)),
            self.buttons(submit_label, cancel_url),
        ]
        return format_html(
            "<form{}>{}{}</form>",
            flatatt(attrs),
            csrf_input,
            mark_safe("".join(body)),
        )

    def error_messages(self):
        if not self.form.is_bound or not self.form.errors:
            return ""
        messages = []
        for name, errors in self.form.errors.items():
            for error in errors:
                if name in self.form.fields:
                    messages.append(f"{self.form[name].label}: {error}")
                else:
                    messages.append(error)
        heading = ngettext(
            "%(count)d error prohibited this %(model)s from being saved",
            "%(count)d errors prohibited this %(model)s from being saved",
            len(messages),
        ) % {"count": len(messages), "model": self.entry._meta.verbose_name}
        return format_html(
            '<div id="error_explanation"><h2>{}</h2><ul>{}</ul></div>',
            heading,
            format_html_join("", "<li>{}</li>", ((message,) for message in messages)),
        )

    def labeled_input_field(self, attr):
        bound_field = self.form[attr]
        caption = bound_field.label_tag(captionize(attr, self.entry), label_suffix="")
        return self.labeled(caption, self.input_field(attr))

    def input_field(self, attr):
        bound_field = self.form[attr]
        widget = bound_field.as_widget()
        if bound_field.errors:
            return format_html('<div class="field_with_errors">{}</div>', widget)
        return widget

    def labeled(self, caption, content):
        if self.helper is not None:
            return self.helper.labeled(caption, content)
        return format_html(
            '<div class="labeled"><div class="caption">{}</div><div class="value">{}</div></div>',
            caption,
            content,
        )

    def buttons(self, submit_label=None, cancel_url=None):
        submit = format_html(
            '<input type="submit" value="{}">',
            submit_label or self.translate("button.save"),
        )
        if cancel_url is None:
            return submit
        cancel = format_html('<a href="{}">{}</a>', cancel_url, self.translate("button.cancel"))
        return format_html("{} {}", submit, cancel)
