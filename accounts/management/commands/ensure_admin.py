"""
Команда для создания/обновления администратора из ADMIN_EMAIL / ADMIN_PASSWORD
"""
from django.conf import settings
from django.contrib.auth.models import User
from django.core.management.base import BaseCommand, CommandError

from accounts.services import get_profile, normalize_email


class Command(BaseCommand):
    help = 'Creates or updates the staff user configured by ADMIN_EMAIL / ADMIN_PASSWORD'

    def add_arguments(self, parser):
        parser.add_argument('--email', default=None, help='Overrides ADMIN_EMAIL')
        parser.add_argument('--password', default=None, help='Overrides ADMIN_PASSWORD')

    def handle(self, *args, **options):
        email = normalize_email(options['email'] or settings.ADMIN_EMAIL)
        password = options['password'] or settings.ADMIN_PASSWORD
        if not email or not password:
            raise CommandError('ADMIN_EMAIL and ADMIN_PASSWORD must be set')

        user, created = User.objects.get_or_create(username=email, defaults={'email': email})
        user.email = email
        user.is_staff = True
        user.is_superuser = True
        user.is_active = True
        user.set_password(password)
        user.save()

        profile = get_profile(user)
        if not profile.name:
            profile.name = 'Admin'
            profile.save(update_fields=['name', 'updated_at'])

        action = 'Created' if created else 'Updated'
        self.stdout.write(self.style.SUCCESS(f'{action} admin user {email}'))
