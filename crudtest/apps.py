from django.apps import AppConfig


class CrudtestConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'crudtest'
    verbose_name = 'CRUD test models'
