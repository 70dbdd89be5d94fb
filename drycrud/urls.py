"""
URL configuration for the drycrud project.

Only the demo app is routed; the ``crud`` helpers reverse its
``<model_name>_create`` and ``<model_name>_update`` routes for form actions.
"""
from django.urls import include, path

urlpatterns = [
    path('', include('crudtest.urls')),
]
