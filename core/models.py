"""
Core models: Center (tenant scope for staff, students and groups).
"""
from django.db import models


class Center(models.Model):
    """
    Teaching center. Groups, students and staff users belong to one center;
    attendance access is scoped by it.
    """
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'centers'
        verbose_name = 'Center'
        verbose_name_plural = 'Centers'
        ordering = ['name']

    def __str__(self):
        return self.name
