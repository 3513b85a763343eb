"""
URLs for attendance app
"""
from django.urls import path
from . import views

app_name = 'attendance'

urlpatterns = [
    path('', views.attendance_create_view, name='create'),
    path('bulk', views.attendance_bulk_view, name='bulk'),
    path('enrollment/<int:enrollment_id>', views.attendance_by_enrollment_view, name='by-enrollment'),
    path('group/<int:group_id>', views.attendance_by_group_view, name='by-group'),
    path('group/<int:group_id>/current-week', views.attendance_current_week_view, name='current-week'),
    path('group/<int:group_id>/date/<str:date>', views.attendance_group_date_view, name='group-date'),
    path('group/<int:group_id>/class-today', views.attendance_class_today_view, name='class-today'),
    path('group/<int:group_id>/monthly', views.attendance_group_monthly_view, name='monthly'),
    path('student/<int:student_id>', views.attendance_by_student_view, name='by-student'),
    path('stats/<int:group_id>', views.attendance_stats_view, name='stats'),
    path('<int:record_id>', views.attendance_detail_view, name='detail'),
]
