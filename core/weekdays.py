"""
Weekday names shared by group schedules and attendance cycles.
Order follows datetime.date.weekday(): Monday=0 .. Sunday=6.
"""
from django.db import models


class Weekday(models.TextChoices):
    MONDAY = 'Monday', 'Monday'
    TUESDAY = 'Tuesday', 'Tuesday'
    WEDNESDAY = 'Wednesday', 'Wednesday'
    THURSDAY = 'Thursday', 'Thursday'
    FRIDAY = 'Friday', 'Friday'
    SATURDAY = 'Saturday', 'Saturday'
    SUNDAY = 'Sunday', 'Sunday'


WEEKDAY_NAMES = tuple(Weekday.values)
