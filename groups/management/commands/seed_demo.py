"""
Management command to seed demo data for the attendance API.
Usage: python manage.py seed_demo [--days Tuesday Thursday] [--students 5]
"""
import os
from datetime import time

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from core.models import Center
from core.weekdays import WEEKDAY_NAMES
from groups.models import Enrollment, Group, GroupSchedule
from students.models import Student

User = get_user_model()


class Command(BaseCommand):
    help = 'Seed demo data: 1 center, 1 admin, 1 teacher, 1 scheduled group with enrolled students'

    def add_arguments(self, parser):
        parser.add_argument('--days', nargs='+', default=['Tuesday'], help='Weekday names the group meets on')
        parser.add_argument('--students', type=int, default=5)

    def handle(self, *args, **options):
        days = options['days']
        unknown = [d for d in days if d not in WEEKDAY_NAMES]
        if unknown:
            raise CommandError(f"Unknown weekday(s): {', '.join(unknown)}")

        with transaction.atomic():
            center, _ = Center.objects.get_or_create(slug='demo-center', defaults={'name': 'Demo Center'})
            self.stdout.write(self.style.SUCCESS(f'Center: {center.name}'))

            admin = self._user(
                os.getenv('SEED_ADMIN_EMAIL', 'admin@classroll.test'),
                os.getenv('SEED_ADMIN_PASSWORD', 'admin12345'),
                'Demo Admin', User.ROLE_ADMIN, center,
            )
            teacher = self._user(
                os.getenv('SEED_TEACHER_EMAIL', 'teacher@classroll.test'),
                os.getenv('SEED_TEACHER_PASSWORD', 'teacher12345'),
                'Demo Teacher', User.ROLE_TEACHER, center,
            )

            group, created = Group.objects.get_or_create(
                center=center, name='Demo Group', defaults={'teacher': teacher}
            )
            if created:
                for day in days:
                    GroupSchedule.objects.create(
                        group=group, day=day, start_time=time(10, 0), end_time=time(11, 30)
                    )
            self.stdout.write(self.style.SUCCESS(
                f"Group: {group.name} ({', '.join(s.day for s in group.schedules.all())})"
            ))

            for i in range(1, options['students'] + 1):
                student, _ = Student.objects.get_or_create(
                    center=center, first_name='Student', last_name=f'{i:02d}'
                )
                Enrollment.objects.get_or_create(group=group, student=student)
            self.stdout.write(self.style.SUCCESS(f"Enrolled: {group.enrollments.count()} students"))

        self.stdout.write(self.style.SUCCESS(f'Done. Login as {admin.email} or {teacher.email}'))

    def _user(self, email, password, full_name, role, center):
        user, created = User.objects.get_or_create(
            email=email,
            defaults={'full_name': full_name, 'role': role, 'center': center},
        )
        user.set_password(password)
        user.save()
        if created:
            self.stdout.write(self.style.SUCCESS(f'Created {role}: {email}'))
        else:
            self.stdout.write(self.style.WARNING(f'{role.capitalize()} exists, password updated: {email}'))
        return user
