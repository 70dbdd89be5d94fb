# Generated manually for CrudTestModel
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='CrudTestModel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=50, unique=True)),
                ('whatever', models.CharField(blank=True, default='', max_length=255)),
                ('children', models.IntegerField(blank=True, null=True)),
                ('rating', models.FloatField(blank=True, null=True)),
                ('income', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('birthdate', models.DateField(blank=True, null=True)),
                ('gets_up_at', models.TimeField(blank=True, null=True)),
                ('last_seen', models.DateTimeField(blank=True, null=True)),
                ('human', models.BooleanField(default=True)),
                ('remarks', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('companion', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='comrades', to='crudtest.crudtestmodel')),
            ],
            options={
                'ordering': ['name'],
            },
        ),
    ]
