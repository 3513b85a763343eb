"""
Admin configuration for groups app
"""
from django.contrib import admin
from .models import Group, GroupSchedule, Enrollment


class GroupScheduleInline(admin.TabularInline):
    model = GroupSchedule
    extra = 1


class EnrollmentInline(admin.TabularInline):
    model = Enrollment
    extra = 0
    autocomplete_fields = ['student']
    readonly_fields = ['enrolled_at']


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Group Admin"""
    list_display = ['name', 'center', 'teacher', 'is_active', 'created_at']
    list_filter = ['is_active', 'center']
    search_fields = ['name']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [GroupScheduleInline, EnrollmentInline]


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ['group', 'student', 'enrolled_at']
    list_filter = ['group']
    search_fields = ['group__name', 'student__first_name', 'student__last_name']
    readonly_fields = ['enrolled_at']
