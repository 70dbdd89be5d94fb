"""Generic list and CRUD views rendered with the standard helper.

Each view class may declare a ``translation_scope``; ``StandardHelper.ti``
looks keys up along the class hierarchy, most specific scope first.
"""

import logging

from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect
from django.urls import reverse
from django.views import View

from .helpers import StandardHelper

logger = logging.getLogger(__name__)


class EntryListView(View):
    """Lists all entries of ``model`` in a table of ``list_attrs``."""

    translation_scope = 'list'
    action_name = 'index'
    model = None
    list_attrs = ()
    helper_class = StandardHelper

    def get_helper(self):
        return self.helper_class(view=self, action_name=self.action_name, request=self.request)

    def get_queryset(self):
        return self.model._default_manager.all()

    def get(self, request, *args, **kwargs):
        helper = self.get_helper()
        return HttpResponse(helper.table(self.get_queryset(), *self.list_attrs))


class EntryCrudView(EntryListView):
    """Adds create and update forms for ``form_attrs`` of ``model``."""

    translation_scope = 'crud'
    form_attrs = ()

    def get_entry(self, pk=None):
        if pk is None:
            return self.model()
        return get_object_or_404(self.model, pk=pk)

    def list_url(self):
        return reverse(f"{self.model._meta.model_name}_list")

    def get(self, request, *args, pk=None, **kwargs):
        if self.action_name == 'index':
            return super().get(request, *args, **kwargs)
        self.action_name = 'edit' if pk is not None else 'new'
        helper = self.get_helper()
        builder = helper.form_builder(self.get_entry(pk), *self.form_attrs)
        return HttpResponse(helper.render_form(builder, cancel_url=self.list_url()))

    def post(self, request, *args, pk=None, **kwargs):
        self.action_name = 'update' if pk is not None else 'create'
        helper = self.get_helper()
        builder = helper.form_builder(
            self.get_entry(pk),
            *self.form_attrs,
            data=request.POST,
            files=request.FILES,
        )
        if builder.is_valid():
            entry = builder.save()
            logger.info(f"{self.model._meta.model_name} #{entry.pk} saved ({self.action_name})")
            return redirect(self.list_url())
        return HttpResponse(helper.render_form(builder, cancel_url=self.list_url()))
