"""Model used to exercise the crud helpers with every column type."""
from django.db import models


class CrudTestModel(models.Model):
    name = models.CharField(max_length=50, unique=True)
    whatever = models.CharField(max_length=255, blank=True, default='')
    children = models.IntegerField(null=True, blank=True)
    companion = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='comrades',
    )
    rating = models.FloatField(null=True, blank=True)
    income = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    birthdate = models.DateField(null=True, blank=True)
    gets_up_at = models.TimeField(null=True, blank=True)
    last_seen = models.DateTimeField(null=True, blank=True)
    human = models.BooleanField(default=True)
    remarks = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name
