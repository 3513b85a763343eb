"""
Group, its weekly schedule, and student enrollment.
A group meets on one or more fixed weekdays (GroupSchedule rows, kept in stored order).
"""
from django.core.exceptions import ValidationError
from django.db import models

from accounts.models import User
from core.weekdays import Weekday
from students.models import Student


class Group(models.Model):
    """Class group of a center, taught by one teacher."""
    center = models.ForeignKey(
        'core.Center',
        on_delete=models.CASCADE,
        related_name='groups',
        db_column='center_id',
    )
    teacher = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='taught_groups',
        limit_choices_to={'role': User.ROLE_TEACHER},
        db_column='teacher_id',
    )
    name = models.CharField(max_length=255)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'groups'
        verbose_name = 'Group'
        verbose_name_plural = 'Groups'
        ordering = ['name']

    def __str__(self):
        return self.name


class GroupSchedule(models.Model):
    """One weekly meeting slot: weekday + start/end time."""
    group = models.ForeignKey(
        Group,
        on_delete=models.CASCADE,
        related_name='schedules',
    )
    day = models.CharField(max_length=10, choices=Weekday.choices)
    start_time = models.TimeField()
    end_time = models.TimeField()

    class Meta:
        db_table = 'group_schedules'
        verbose_name = 'Group Schedule'
        verbose_name_plural = 'Group Schedules'
        ordering = ['id']

    def __str__(self):
        return f"{self.group.name} - {self.day} {self.start_time:%H:%M}-{self.end_time:%H:%M}"

    def clean(self):
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValidationError({'end_time': 'End time must be after start time.'})


class Enrollment(models.Model):
    """Link between a student and a group; attendance records attach to it."""
    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name='enrollments',
    )
    group = models.ForeignKey(
        Group,
        on_delete=models.CASCADE,
        related_name='enrollments',
    )
    enrolled_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'enrollments'
        verbose_name = 'Enrollment'
        verbose_name_plural = 'Enrollments'
        unique_together = [['student', 'group']]
        ordering = ['-enrolled_at']

    def __str__(self):
        return f"{self.group.name} - {self.student.full_name}"
