"""
Admin configuration for attendance app
"""
from django.contrib import admin
from .models import AttendanceRecord


@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    """Attendance Record Admin"""
    list_display = ['enrollment', 'date', 'status', 'recorded_by', 'updated_at']
    list_filter = ['status', 'date', 'enrollment__group']
    search_fields = ['enrollment__student__first_name', 'enrollment__student__last_name']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['enrollment']
    ordering = ['-date']
