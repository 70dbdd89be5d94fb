from django.urls import path

from .views import CrudTestModelView

urlpatterns = [
    path('crud_test_models/', CrudTestModelView.as_view(action_name='index'), name='crudtestmodel_list'),
    path('crud_test_models/new/', CrudTestModelView.as_view(action_name='new'), name='crudtestmodel_create'),
    path('crud_test_models/<int:pk>/edit/', CrudTestModelView.as_view(action_name='edit'), name='crudtestmodel_update'),
]
