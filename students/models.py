"""
Student records. Students are not users; they are enrolled into groups (groups.Enrollment).
"""
from django.db import models


class Student(models.Model):
    """
    Student of a center. Inactive students drop out of group rosters
    but keep their attendance history.
    """
    center = models.ForeignKey(
        'core.Center',
        on_delete=models.CASCADE,
        related_name='students',
        db_column='center_id',
    )
    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150)
    email = models.EmailField(blank=True, null=True)
    phone = models.CharField(max_length=20, blank=True, null=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'students'
        verbose_name = 'Student'
        verbose_name_plural = 'Students'
        ordering = ['last_name', 'first_name']

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()
