from datetime import date
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse

from .models import CrudTestModel


class CrudTestModelViewTests(TestCase):
    def setUp(self):
        self.entry = CrudTestModel.objects.create(
            name="AAAAA",
            children=9,
            income=Decimal("10000000.10"),
            birthdate=date(1910, 1, 1),
        )

    def test_list_renders_table(self):
        response = self.client.get(reverse("crudtestmodel_list"))

        self.assertEqual(response.status_code, 200)
        content = response.content.decode()
        self.assertIn('<table class="list">', content)
        self.assertIn("<td>AAAAA</td>", content)
        self.assertIn("<td>10000000.10</td>", content)
        self.assertIn("<td>1910-01-01</td>", content)
        self.assertIn("<td>(none)</td>", content)

    def test_list_without_entries(self):
        CrudTestModel.objects.all().delete()

        response = self.client.get(reverse("crudtestmodel_list"))

        self.assertHTMLEqual('<div class="list">No entries found.</div>', response.content.decode())

    def test_new_form(self):
        response = self.client.get(reverse("crudtestmodel_create"))

        self.assertEqual(response.status_code, 200)
        content = response.content.decode()
        self.assertIn('action="/crud_test_models/new/"', content)
        self.assertIn('name="csrfmiddlewaretoken"', content)
        self.assertIn('<a href="/crud_test_models/">Cancel</a>', content)

    def test_edit_form(self):
        response = self.client.get(reverse("crudtestmodel_update", args=[self.entry.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertRegex(response.content.decode(), r'<input type="text" name="name" value="AAAAA"')

    def test_edit_unknown_entry(self):
        response = self.client.get(reverse("crudtestmodel_update", args=[self.entry.pk + 100]))

        self.assertEqual(response.status_code, 404)

    def test_create_entry(self):
        with self.assertLogs("crud.views", "INFO") as logs:
            response = self.client.post(
                reverse("crudtestmodel_create"),
                {"name": "BBBBB", "children": "3", "human": "on", "remarks": "hello"},
            )

        self.assertRedirects(response, reverse("crudtestmodel_list"))
        created = CrudTestModel.objects.get(name="BBBBB")
        self.assertIn(f"crudtestmodel #{created.pk} saved (create)", logs.output[0])
        self.assertEqual(created.children, 3)
        self.assertTrue(created.human)
        self.assertIsNone(created.birthdate)

    def test_update_entry(self):
        response = self.client.post(
            reverse("crudtestmodel_update", args=[self.entry.pk]),
            {
                "name": "AAAAA",
                "children": "10",
                "birthdate_year": "1910",
                "birthdate_month": "1",
                "birthdate_day": "2",
            },
        )

        self.assertRedirects(response, reverse("crudtestmodel_list"))
        self.entry.refresh_from_db()
        self.assertEqual(self.entry.children, 10)
        self.assertEqual(self.entry.birthdate, date(1910, 1, 2))
        self.assertFalse(self.entry.human)

    def test_create_invalid_entry_renders_errors(self):
        response = self.client.post(reverse("crudtestmodel_create"), {"name": "", "children": "x"})

        self.assertEqual(response.status_code, 200)
        content = response.content.decode()
        self.assertIn('<div id="error_explanation">', content)
        self.assertIn("2 errors prohibited this crud test model from being saved", content)
        self.assertRegex(content, r'<div class="field_with_errors"><input type="text" name="name"')
        self.assertRegex(content, r'<div class="field_with_errors"><input type="number" name="children" value="x"')
        self.assertEqual(CrudTestModel.objects.count(), 1)
