from datetime import date, datetime, time, timezone as dt_timezone
from decimal import Decimal

from django.template import Context, Template
from django.test import SimpleTestCase, TestCase, override_settings
from django.utils.safestring import SafeData

from crudtest.models import CrudTestModel

from .columns import ColumnType, column_type
from .form_builder import _merge_attrs
from .formatters import captionize, empty_string, format_value
from .helpers import StandardHelper
from .table_builder import StandardTableBuilder, next_direction
from .translations import TranslationStore, translation_scopes, translations


class SizeHelper(StandardHelper):
    def format_size(self, obj):
        return f"{self.f(len(obj))} chars"


class ListController:
    translation_scope = "list"


class CrudController(ListController):
    translation_scope = "crud"


class CrudTestModelsController(CrudController):
    translation_scope = "crud_test_models"
    action_name = "index"


def create_test_data(cls):
    cls.aaaaa = CrudTestModel.objects.create(
        name="AAAAA",
        children=9,
        rating=1.1,
        income=Decimal("10000000.10"),
        birthdate=date(1910, 1, 1),
        gets_up_at=time(1, 1),
        last_seen=datetime(2010, 1, 1, 11, 21, tzinfo=dt_timezone.utc),
        human=True,
        remarks="AAAAA BBBBB CCCCC\nAAAAA BBBBB CCCCC",
    )
    cls.bbbbb = CrudTestModel.objects.create(
        name="BBBBB",
        children=2,
        companion=cls.aaaaa,
        human=False,
    )


class ValueFormatTests(SimpleTestCase):
    def test_format_none_is_safe_empty_string(self):
        self.assertIsInstance(format_value(None), SafeData)
        self.assertEqual("", format_value(None))
        self.assertEqual("", format_value(None, ColumnType.INTEGER))

    @override_settings(DRY_CRUD_EMPTY_STRING="&nbsp;")
    def test_format_none_uses_configured_empty_string(self):
        self.assertEqual("&nbsp;", format_value(None))
        self.assertIsInstance(empty_string(), SafeData)

    def test_format_integers(self):
        self.assertEqual("0", format_value(0))
        self.assertEqual("10", format_value(10))
        self.assertEqual("10,000,000", format_value(10000000))
        self.assertEqual("10,000,000", format_value(10000000, ColumnType.INTEGER))
        self.assertEqual("-1,234", format_value(-1234))

    def test_format_floats(self):
        self.assertEqual("1.00", format_value(1.0))
        self.assertEqual("1.20", format_value(1.2))
        self.assertEqual("3.14", format_value(3.14159, ColumnType.FLOAT))
        self.assertEqual("3.15", format_value(3.145001, ColumnType.FLOAT))

    def test_format_floats_rounds_half_up(self):
        self.assertEqual("2.68", format_value(2.675))
        self.assertEqual("0.13", format_value(Decimal("0.125")))

    def test_format_decimals_are_not_grouped(self):
        self.assertEqual("10000000.10", format_value(Decimal("10000000.1")))

    def test_format_non_finite_float(self):
        self.assertEqual("inf", format_value(float("inf")))

    def test_format_booleans(self):
        self.assertEqual("yes", format_value(True))
        self.assertEqual("no", format_value(False))

    def test_format_dates_and_times(self):
        self.assertEqual("1910-01-01", format_value(date(1910, 1, 1)))
        self.assertEqual("01:01", format_value(time(1, 1)))
        self.assertEqual("2010-01-01 11:21", format_value(datetime(2010, 1, 1, 11, 21)))

    def test_format_aware_datetime_in_current_time_zone(self):
        value = datetime(2010, 1, 1, 11, 21, tzinfo=dt_timezone.utc)
        self.assertEqual("2010-01-01 11:21", format_value(value, ColumnType.DATETIME))

    def test_format_strings_are_escaped(self):
        self.assertEqual("blah blah", format_value("blah blah"))
        result = format_value("<injection>")
        self.assertEqual("&lt;injection&gt;", result)
        self.assertIsInstance(result, SafeData)
        self.assertEqual("a &amp; b", format_value("a & b", ColumnType.STRING))

    def test_format_text_converts_line_breaks(self):
        result = format_value("first\nsecond\n\nthird", ColumnType.TEXT)
        self.assertIsInstance(result, SafeData)
        self.assertHTMLEqual("<p>first<br>second</p>\n\n<p>third</p>", result)

    def test_format_text_escapes_markup(self):
        result = format_value("<b>bold</b>", ColumnType.TEXT)
        self.assertNotIn("<b>", result)
        self.assertIn("&lt;b&gt;", result)

    def test_unknown_hint_falls_back_to_string(self):
        self.assertEqual("&lt;x&gt;", format_value("<x>", "unknown"))
        self.assertEqual("12", format_value(12, "none"))

    def test_string_hint_names(self):
        self.assertEqual("1,000", format_value(1000, "integer"))

    def test_typed_rules_fall_back_to_string_for_other_values(self):
        self.assertEqual("1910-01-01", format_value("1910-01-01", ColumnType.DATE))
        self.assertEqual("&lt;x&gt;", format_value("<x>", ColumnType.TIME))
        self.assertEqual("yesterday", format_value("yesterday", ColumnType.DATETIME))
        self.assertEqual("1.5", format_value("1.5", ColumnType.INTEGER))
        self.assertEqual("many", format_value("many", ColumnType.DECIMAL))


class CaptionizeTests(SimpleTestCase):
    def test_captionize(self):
        self.assertEqual("Camel Case", captionize("camel_case"))
        self.assertEqual("All Upper Case", captionize("all upper case"))
        self.assertEqual("All Upper Case", captionize("All Upper Case"))
        self.assertEqual("With Object", captionize("With object", object()))

    def test_captionize_escapes(self):
        result = captionize("bad <title>")
        self.assertIsInstance(result, SafeData)
        self.assertNotIn("<", result)
        self.assertEqual("Bad Title", result)

    def test_captionize_uses_model_verbose_name(self):
        self.assertEqual("Gets up at", captionize("gets_up_at", CrudTestModel))
        self.assertEqual("Unknown Attr", captionize("unknown_attr", CrudTestModel))


class StandardHelperTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        create_test_data(cls)

    def setUp(self):
        self.helper = SizeHelper()

    def tearDown(self):
        translations.reset()

    def test_labeled_text_as_block(self):
        result = self.helper.labeled("label", lambda: "value")

        self.assertIsInstance(result, SafeData)
        self.assertHTMLEqual(
            '<div class="labeled"><div class="caption">label</div><div class="value">value</div></div>',
            result,
        )

    def test_labeled_text_empty(self):
        result = self.helper.labeled("label", "")

        self.assertIsInstance(result, SafeData)
        self.assertEqual(
            f'<div class="labeled"><div class="caption">label</div><div class="value">{empty_string()}</div></div>',
            result,
        )

    def test_labeled_text_as_content(self):
        result = self.helper.labeled("label", "value <unsafe>")

        self.assertIsInstance(result, SafeData)
        self.assertEqual(
            '<div class="labeled"><div class="caption">label</div>'
            '<div class="value">value &lt;unsafe&gt;</div></div>',
            result,
        )

    def test_labeled_attr(self):
        result = self.helper.labeled_attr("foo", "size")

        self.assertIsInstance(result, SafeData)
        self.assertHTMLEqual(
            '<div class="labeled"><div class="caption">Size</div><div class="value">3 chars</div></div>',
            result,
        )

    def test_alternate_row(self):
        result_1 = self.helper.tr_alt(lambda: "(test row content)")
        result_2 = self.helper.tr_alt(lambda: "(test row content)")
        result_3 = self.helper.tr_alt("(test row content)")

        self.assertIsInstance(result_1, SafeData)
        self.assertIsInstance(result_2, SafeData)
        self.assertEqual('<tr class="even">(test row content)</tr>', result_1)
        self.assertEqual('<tr class="odd">(test row content)</tr>', result_2)
        self.assertEqual('<tr class="even">(test row content)</tr>', result_3)

    def test_f_delegates_to_value_formatter(self):
        self.assertEqual("10,000,000", self.helper.f(10000000))
        self.assertEqual("", self.helper.f(None))

    def test_format_attr_with_fallthrough_to_f(self):
        entry = CrudTestModel(name="x", rating=12.23424)
        self.assertEqual("12.23", self.helper.format_attr(entry, "rating"))
        self.assertEqual("ABCD", self.helper.format_attr("abcd", "upper"))

    def test_format_attr_with_custom_format_size_method(self):
        self.assertEqual("4 chars", self.helper.format_attr("abcd", "size"))

    def test_format_attr_with_unknown_attribute_raises(self):
        with self.assertRaises(AttributeError):
            self.helper.format_attr("abcd", "to_f")

    def test_format_attr_belongs_to(self):
        self.assertEqual("AAAAA", self.helper.format_attr(self.bbbbb, "companion"))
        self.assertEqual("(none)", self.helper.format_attr(self.aaaaa, "companion"))
        self.assertEqual(str(self.aaaaa.pk), self.helper.format_attr(self.bbbbb, "companion_id"))

    def test_column_types(self):
        m = self.aaaaa
        self.assertEqual(ColumnType.STRING, column_type(m, "name"))
        self.assertEqual(ColumnType.INTEGER, column_type(m, "children"))
        self.assertEqual(ColumnType.INTEGER, column_type(m, "companion_id"))
        self.assertIsNone(column_type(m, "companion"))
        self.assertEqual(ColumnType.FLOAT, column_type(m, "rating"))
        self.assertEqual(ColumnType.DECIMAL, column_type(m, "income"))
        self.assertEqual(ColumnType.DATE, column_type(m, "birthdate"))
        self.assertEqual(ColumnType.TIME, column_type(m, "gets_up_at"))
        self.assertEqual(ColumnType.DATETIME, column_type(m, "last_seen"))
        self.assertEqual(ColumnType.BOOLEAN, column_type(m, "human"))
        self.assertEqual(ColumnType.TEXT, column_type(m, "remarks"))

    def test_column_type_without_column(self):
        self.assertIsNone(column_type(self.aaaaa, "comrades"))
        self.assertIsNone(column_type(self.aaaaa, "unknown"))
        self.assertIsNone(column_type("foo", "size"))
        self.assertEqual(ColumnType.STRING, self.helper.column_type(CrudTestModel, "name"))

    def test_format_integer_column(self):
        m = self.aaaaa
        self.assertEqual("9", self.helper.format_type(m, "children"))

        m.children = 10000
        self.assertEqual("10,000", self.helper.format_type(m, "children"))

    def test_format_float_column(self):
        m = self.aaaaa
        self.assertEqual("1.10", self.helper.format_type(m, "rating"))

        m.rating = 3.145001
        self.assertEqual("3.15", self.helper.format_type(m, "rating"))

    def test_format_decimal_column(self):
        self.assertEqual("10000000.10", self.helper.format_type(self.aaaaa, "income"))

    def test_format_decimal_column_from_database(self):
        m = CrudTestModel.objects.get(pk=self.aaaaa.pk)
        self.assertEqual("10000000.10", self.helper.format_type(m, "income"))

    def test_format_date_column(self):
        self.assertEqual("1910-01-01", self.helper.format_type(self.aaaaa, "birthdate"))

    def test_format_time_column(self):
        self.assertEqual("01:01", self.helper.format_type(self.aaaaa, "gets_up_at"))

    def test_format_datetime_column(self):
        self.assertEqual("2010-01-01 11:21", self.helper.format_type(self.aaaaa, "last_seen"))

    def test_format_text_column(self):
        result = self.helper.format_type(self.aaaaa, "remarks")
        self.assertIsInstance(result, SafeData)
        self.assertHTMLEqual("<p>AAAAA BBBBB CCCCC<br>AAAAA BBBBB CCCCC</p>", result)

    def test_format_empty_column(self):
        self.assertEqual(empty_string(), self.helper.format_type(self.bbbbb, "birthdate"))

    def test_format_unsaved_entry_with_assigned_strings(self):
        entry = CrudTestModel(
            name="x",
            children="1.5",
            income="12.5",
            birthdate="1910-01-01",
            gets_up_at="01:01",
            last_seen="2010-01-01 11:21",
        )

        self.assertEqual("1910-01-01", self.helper.format_attr(entry, "birthdate"))
        self.assertEqual("01:01", self.helper.format_attr(entry, "gets_up_at"))
        self.assertEqual("2010-01-01 11:21", self.helper.format_attr(entry, "last_seen"))
        self.assertEqual("12.50", self.helper.format_attr(entry, "income"))
        self.assertEqual("1.5", self.helper.format_attr(entry, "children"))
        self.assertHTMLEqual(
            '<div class="labeled"><div class="caption">Birthdate</div><div class="value">1910-01-01</div></div>',
            self.helper.labeled_attr(entry, "birthdate"),
        )

    def test_empty_table_should_render_message(self):
        result = self.helper.table([], build=lambda t: None)
        self.assertIsInstance(result, SafeData)
        self.assertHTMLEqual('<div class="list">No entries found.</div>', result)

    def test_non_empty_table_should_render_table(self):
        result = self.helper.table(["foo", "bar"], build=lambda t: t.attrs("size", "upper"))
        self.assertIsInstance(result, SafeData)
        self.assertRegex(result, r"^<table.*</table>$")
        self.assertIn("<td>3 chars</td>", result)
        self.assertIn("<td>FOO</td>", result)

    def test_table_with_attrs(self):
        expected = StandardTableBuilder.table(["foo", "bar"], SizeHelper(), lambda t: t.attrs("size", "upper"))
        actual = self.helper.table(["foo", "bar"], "size", "upper")
        self.assertIsInstance(actual, SafeData)
        self.assertEqual(expected, actual)

    def test_table_of_model_entries(self):
        result = self.helper.table(CrudTestModel.objects.all(), "name", "companion", "human")
        self.assertHTMLEqual(
            '<table class="list">'
            "<tr><th>Name</th><th>Companion</th><th>Human</th></tr>"
            '<tr class="even"><td>AAAAA</td><td>(none)</td><td>yes</td></tr>'
            '<tr class="odd"><td>BBBBB</td><td>AAAAA</td><td>no</td></tr>'
            "</table>",
            result,
        )

    def test_captionize_on_helper(self):
        self.assertEqual("Camel Case", self.helper.captionize("camel_case"))

    def test_standard_form_for_existing_entry(self):
        e = self.aaaaa
        f = self.helper.standard_form(e, "name", "children", "birthdate", "human", html={"class": "special"})

        self.assertRegex(f, rf'<form action="/crud_test_models/{e.pk}/edit/" class="special" method="post">')
        self.assertRegex(f, r'<input type="text" name="name" value="AAAAA"')
        self.assertIn('name="birthdate_year"', f)
        self.assertInHTML('<option value="1910" selected>1910</option>', f)
        self.assertInHTML('<option value="1" selected>January</option>', f)
        self.assertInHTML('<option value="1" selected>1</option>', f)
        self.assertRegex(f, r'<input type="number" name="children" value="9"')
        self.assertRegex(f, r'<input type="checkbox" name="human"')
        self.assertIn('<input type="submit" value="Save">', f)
        self.assertNotIn("error_explanation", f)

    def test_standard_form_for_new_entry(self):
        e = CrudTestModel()
        f = self.helper.standard_form(e, "name", "children", "birthdate", "human", html={"class": "special"})

        self.assertRegex(f, r'<form action="/crud_test_models/new/" class="special" method="post">')
        self.assertRegex(f, r'<input type="text" name="name"')
        self.assertNotRegex(f, r'<input type="text" name="name" value=')
        self.assertIn('name="birthdate_year"', f)
        self.assertRegex(f, r'<input type="number" name="children"')
        self.assertNotRegex(f, r'<input type="number" name="children" value=')
        self.assertIn('<input type="submit" value="Save">', f)

    def test_standard_form_with_errors(self):
        e = self.aaaaa
        data = {
            "name": "",
            "children": "9",
            "birthdate_year": "1910",
            "birthdate_month": "1",
            "birthdate_day": "1",
            "human": "on",
        }
        f = self.helper.standard_form(e, "name", "children", "birthdate", "human", data=data)

        self.assertRegex(f, rf'<form action="/crud_test_models/{e.pk}/edit/" method="post">')
        self.assertIn('<div id="error_explanation">', f)
        self.assertIn("1 error prohibited this crud test model from being saved", f)
        self.assertRegex(f, r'<div class="field_with_errors"><input type="text" name="name"')
        self.assertIn('name="birthdate_year"', f)
        self.assertInHTML('<option value="1910" selected>1910</option>', f)
        self.assertInHTML('<option value="1" selected>January</option>', f)
        self.assertRegex(f, r'<input type="number" name="children" value="9"')
        self.assertRegex(f, r'<input type="checkbox" name="human"')
        self.assertIn('<input type="submit" value="Save">', f)

    def test_standard_form_with_custom_url_and_cancel_link(self):
        f = self.helper.standard_form(
            self.aaaaa,
            "name",
            url="/somewhere/",
            submit_label="Store",
            cancel_url="/back/",
        )
        self.assertRegex(f, r'<form action="/somewhere/" method="post">')
        self.assertIn('<input type="submit" value="Store">', f)
        self.assertIn('<a href="/back/">Cancel</a>', f)

    def test_translate_inheritable_lookup(self):
        helper = StandardHelper(view=CrudTestModelsController())

        translations.store_translations("en", {"global": {"test_key": "global"}})
        self.assertEqual("global", helper.ti("test_key"))

        translations.store_translations("en", {"list": {"global": {"test_key": "list global"}}})
        self.assertEqual("list global", helper.ti("test_key"))

        translations.store_translations("en", {"list": {"index": {"test_key": "list index"}}})
        self.assertEqual("list index", helper.ti("test_key"))

        translations.store_translations("en", {"crud": {"global": {"test_key": "crud global"}}})
        self.assertEqual("crud global", helper.ti("test_key"))

        translations.store_translations("en", {"crud": {"index": {"test_key": "crud index"}}})
        self.assertEqual("crud index", helper.ti("test_key"))

        translations.store_translations("en", {"crud_test_models": {"global": {"test_key": "test global"}}})
        self.assertEqual("test global", helper.ti("test_key"))

        translations.store_translations("en", {"crud_test_models": {"index": {"test_key": "test index"}}})
        self.assertEqual("test index", helper.ti("test_key"))

    def test_translate_association_lookup(self):
        assoc = CrudTestModel._meta.get_field("companion")

        translations.store_translations("en", {"global": {"associations": {"test_key": "global"}}})
        self.assertEqual("global", self.helper.ta("test_key", assoc))

        translations.store_translations("en", {"associations": {"crudtestmodel": {"test_key": "model"}}})
        self.assertEqual("model", self.helper.ta("test_key", assoc))

        translations.store_translations(
            "en",
            {"associations": {"models": {"crudtestmodel": {"companion": {"test_key": "companion"}}}}},
        )
        self.assertEqual("companion", self.helper.ta("test_key", assoc))

        self.assertEqual("global", self.helper.ta("test_key"))

    def test_translate_missing_key(self):
        self.assertEqual("Missing Key", self.helper.ti("missing_key"))
        self.assertEqual("fallback", self.helper.ti("missing_key", default="fallback"))

    def test_translate_interpolation(self):
        translations.store_translations("en", {"global": {"greeting": "Hello {name}"}})
        self.assertEqual("Hello Ada", self.helper.ti("greeting", name="Ada"))

    def test_translate_interpolation_with_literal_braces(self):
        translations.store_translations("en", {"global": {"braces": "Use {braces} for {name}", "open": "a { b"}})

        with self.assertLogs("crud.translations", "WARNING"):
            self.assertEqual("Use {braces} for {name}", self.helper.ti("braces", name="Ada"))
        with self.assertLogs("crud.translations", "WARNING"):
            self.assertEqual("a { b", self.helper.ti("open", name="Ada"))

    def test_translate_with_injected_resolver(self):
        seen = []

        def resolver(key, scopes):
            seen.append(list(scopes))
            values = {"crud.global.title": "Injected"}
            for scope in scopes:
                if f"{scope}.{key}" in values:
                    return values[f"{scope}.{key}"]
            return None

        helper = StandardHelper(view=CrudController(), resolver=resolver)
        self.assertEqual("Injected", helper.ti("title"))
        self.assertEqual([["crud.global", "list.global", "global"]], seen)


class TranslationStoreTests(SimpleTestCase):
    def test_lookup_and_reset(self):
        store = TranslationStore({"en": {"global": {"a": "A"}}})
        store.store_translations("EN", {"global": {"b": "B"}})
        self.assertEqual("A", store.lookup("en", "global.a"))
        self.assertEqual("B", store.lookup("en", "global.b"))
        self.assertIsNone(store.lookup("en", "global"))
        self.assertIsNone(store.lookup("de", "global.a"))

        store.reset()
        self.assertIsNone(store.lookup("en", "global.b"))
        self.assertEqual("A", store.lookup("en", "global.a"))

    def test_translation_scopes_follow_class_hierarchy(self):
        self.assertEqual(["crud_test_models", "crud", "list"], translation_scopes(CrudTestModelsController))
        self.assertEqual([], translation_scopes(None))


class TableBuilderTests(SimpleTestCase):
    def test_next_direction(self):
        self.assertEqual("desc", next_direction("name", "asc", "name"))
        self.assertEqual("asc", next_direction("name", "desc", "name"))
        self.assertEqual("asc", next_direction("name", "asc", "children"))

    def test_form_attrs_merge_classes(self):
        merged = _merge_attrs({"method": "post", "class": "entry"}, {"method": "get", "class": "special"})
        self.assertEqual({"method": "get", "class": "entry special"}, merged)
        self.assertEqual({"class": "special"}, _merge_attrs({}, {"class": "special"}))

    def test_sortable_attr_header(self):
        result = StandardTableBuilder.table(
            ["foo"],
            StandardHelper(),
            lambda t: t.sortable_attr("upper", current_sort="upper", current_dir="asc"),
        )
        self.assertIn('<th><a href="?sort=upper&amp;sort_dir=desc">Upper</a></th>', result)

    def test_custom_column(self):
        def build(t):
            t.col("Length", lambda entry: len(entry), **{"class": "right"})

        result = StandardTableBuilder.table(["foo"], StandardHelper(), build)
        self.assertHTMLEqual(
            '<table class="list"><tr><th class="right">Length</th></tr>'
            '<tr class="even"><td class="right">3</td></tr></table>',
            result,
        )


class StandardTagsTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        create_test_data(cls)

    def render(self, source, **context):
        return Template("{% load standard_tags %}" + source).render(Context(context))

    def test_f_filter(self):
        self.assertEqual("10,000 &lt;b&gt;", self.render("{{ number|f }} {{ text|f }}", number=10000, text="<b>"))

    def test_captionize_filter(self):
        self.assertEqual("Camel Case", self.render("{{ 'camel_case'|captionize }}"))

    def test_tr_alt_alternates_within_one_render(self):
        result = self.render("{% tr_alt 'a' %}{% tr_alt 'b' %}")
        self.assertEqual('<tr class="even">a</tr><tr class="odd">b</tr>', result)

    def test_labeled_attr_tag(self):
        result = self.render("{% labeled_attr entry 'children' %}", entry=self.aaaaa)
        self.assertHTMLEqual(
            '<div class="labeled"><div class="caption">Children</div><div class="value">9</div></div>',
            result,
        )

    def test_crud_table_tag(self):
        self.assertHTMLEqual(
            '<div class="list">No entries found.</div>',
            self.render("{% crud_table entries 'name' %}", entries=[]),
        )
        result = self.render("{% crud_table entries 'name' %}", entries=CrudTestModel.objects.all())
        self.assertIn("<td>AAAAA</td>", result)

    def test_ti_tag(self):
        self.assertEqual("Save", self.render("{% ti 'button.save' %}"))
