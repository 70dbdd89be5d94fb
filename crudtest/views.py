from crud.views import EntryCrudView

from .models import CrudTestModel


class CrudTestModelView(EntryCrudView):
    translation_scope = 'crud_test_models'
    model = CrudTestModel
    list_attrs = ('name', 'children', 'companion', 'rating', 'income', 'birthdate', 'human')
    form_attrs = ('name', 'children', 'companion', 'rating', 'income', 'birthdate', 'gets_up_at', 'human', 'remarks')
