"""Template access to the standard crud helpers.

``{% load standard_tags %}`` exposes the formatting filters and the markup
tags. Tags that need state (the ``tr_alt`` row cycle) share one
``StandardHelper`` per template render.
"""

from __future__ import annotations

from django import template

from crud.formatters import captionize as captionize_text
from crud.formatters import format_value
from crud.helpers import StandardHelper

register = template.Library()

HELPER_KEY = "crud_standard_helper"


def _helper(context) -> StandardHelper:
    """Return the helper bound to the current render, creating it once."""

    render_context = context.render_context
    helper = render_context.get(HELPER_KEY)
    if helper is None:
        view = context.get("view")
        helper = StandardHelper(
            view=view,
            action_name=context.get("action_name"),
            request=context.get("request"),
        )
        render_context[HELPER_KEY] = helper
    return helper


@register.filter
def f(value):
    """Format ``value`` the way the list and detail screens show it."""
    return format_value(value)


@register.filter
def captionize(value, model=None):
    return captionize_text(value, model)


@register.simple_tag(takes_context=True)
def format_attr(context, obj, attr):
    return _helper(context).format_attr(obj, attr)


@register.simple_tag(takes_context=True)
def labeled(context, label, content=None):
    return _helper(context).labeled(label, content)


@register.simple_tag(takes_context=True)
def labeled_attr(context, obj, attr):
    return _helper(context).labeled_attr(obj, attr)


@register.simple_tag(takes_context=True)
def tr_alt(context, content=None):
    return _helper(context).tr_alt(content)


@register.simple_tag(takes_context=True)
def crud_table(context, entries, *attrs, **html_options):
    """Render ``entries`` with one column per attribute name."""
    return _helper(context).table(entries, *attrs, **html_options)


@register.simple_tag(takes_context=True)
def ti(context, key, **interpolations):
    return _helper(context).ti(key, **interpolations)
