"""
Tests for registration, session auth, password reset and account updates.
"""
from datetime import timedelta
from io import StringIO

from django.contrib.auth.models import User
from django.core import mail
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from accounts.models import PasswordResetToken


class AccountsApiTestCase(TestCase):
    """
    Base fixture: one registered user with a profile.
    """

    @classmethod
    def setUpTestData(cls):
        cls.user = User.objects.create_user(
            username='olena@example.com', email='olena@example.com', password='oldpass1'
        )
        cls.user.profile.name = 'Olena'
        cls.user.profile.save()

    def setUp(self):
        self.client = APIClient()


class RegisterTests(AccountsApiTestCase):
    def test_register_creates_user_and_profile(self):
        response = self.client.post('/api/auth/register/', {
            'email': 'New@Example.com',
            'password': 'secret123',
            'name': 'Taras',
            'phone': '+380501112233',
        }, format='json')

        self.assertEqual(response.status_code, 201, response.content)
        user = User.objects.get(pk=response.json()['userId'])
        self.assertEqual(user.username, 'new@example.com')
        self.assertEqual(user.profile.name, 'Taras')
        self.assertEqual(user.profile.phone, '+380501112233')
        self.assertTrue(user.check_password('secret123'))

    def test_duplicate_email(self):
        response = self.client.post('/api/auth/register/', {
            'email': 'olena@example.com', 'password': 'secret123',
        }, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Email already registered'})

    def test_short_password(self):
        response = self.client.post('/api/auth/register/', {
            'email': 'x@example.com', 'password': '123',
        }, format='json')
        self.assertEqual(response.status_code, 400)


class SessionTests(AccountsApiTestCase):
    def test_login_session_logout(self):
        self.assertEqual(self.client.get('/api/auth/session/').json(), {'user': None})

        response = self.client.post('/api/auth/login/', {
            'email': 'OLENA@example.com', 'password': 'oldpass1',
        }, format='json')
        self.assertEqual(response.status_code, 200, response.content)

        session = self.client.get('/api/auth/session/').json()['user']
        self.assertEqual(session['email'], 'olena@example.com')
        self.assertEqual(session['name'], 'Olena')
        self.assertEqual(session['role'], 'USER')

        self.client.post('/api/auth/logout/', format='json')
        self.assertEqual(self.client.get('/api/auth/session/').json(), {'user': None})

    def test_wrong_password(self):
        response = self.client.post('/api/auth/login/', {
            'email': 'olena@example.com', 'password': 'nope',
        }, format='json')
        self.assertEqual(response.status_code, 400)


class PasswordResetTests(AccountsApiTestCase):
    def test_unknown_email_gets_neutral_answer(self):
        response = self.client.post('/api/auth/forgot/', {'email': 'ghost@example.com'}, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'message': 'If the email exists, a reset link will be sent.'})
        self.assertEqual(len(mail.outbox), 0)

    def test_known_email_is_mailed_not_exposed(self):
        response = self.client.post('/api/auth/forgot/', {'email': 'olena@example.com'}, format='json')

        self.assertEqual(response.json(), {'message': 'If the email exists, a reset link will be sent.'})
        self.assertEqual(len(mail.outbox), 1)
        token = PasswordResetToken.objects.get(user=self.user)
        self.assertIn(token.token, mail.outbox[0].body)
        self.assertFalse(token.used)

    @override_settings(PASSWORD_RESET_EXPOSE_TOKEN=True)
    def test_token_exposed_when_enabled(self):
        response = self.client.post('/api/auth/forgot/', {'email': 'olena@example.com'}, format='json')
        token = PasswordResetToken.objects.get(user=self.user)
        self.assertEqual(response.json()['token'], token.token)

    def test_reset_is_single_use(self):
        self.client.post('/api/auth/forgot/', {'email': 'olena@example.com'}, format='json')
        token = PasswordResetToken.objects.get(user=self.user).token

        first = self.client.post('/api/auth/reset/', {'token': token, 'password': 'newpass1'}, format='json')
        second = self.client.post('/api/auth/reset/', {'token': token, 'password': 'newpass2'}, format='json')

        self.assertEqual(first.status_code, 200)
        self.assertEqual(second.status_code, 400)
        self.assertEqual(second.json(), {'error': 'Invalid or used token'})
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('newpass1'))

    def test_expired_token(self):
        PasswordResetToken.objects.create(
            user=self.user,
            token='expired-token-123',
            expires_at=timezone.now() - timedelta(minutes=1),
        )

        response = self.client.post('/api/auth/reset/', {
            'token': 'expired-token-123', 'password': 'newpass1',
        }, format='json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Token expired'})
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('oldpass1'))


class AccountUpdateTests(AccountsApiTestCase):
    def setUp(self):
        super().setUp()
        self.client.force_authenticate(self.user)

    def test_update_profile_fields(self):
        response = self.client.post('/api/account/update/', {'phone': '+380509998877'}, format='json')

        self.assertEqual(response.json(), {'ok': True})
        self.user.profile.refresh_from_db()
        self.assertEqual(self.user.profile.phone, '+380509998877')
        self.assertEqual(self.user.profile.name, 'Olena')

    def test_password_change_requires_current(self):
        response = self.client.post('/api/account/update/', {'newPassword': 'newpass1'}, format='json')
        self.assertEqual(response.json(), {'error': 'Current password required'})

        response = self.client.post('/api/account/update/', {
            'newPassword': 'newpass1', 'currentPassword': 'wrong',
        }, format='json')
        self.assertEqual(response.json(), {'error': 'Current password incorrect'})

    def test_password_change(self):
        response = self.client.post('/api/account/update/', {
            'newPassword': 'newpass1', 'currentPassword': 'oldpass1',
        }, format='json')

        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('newpass1'))

    def test_anonymous_rejected(self):
        self.client.force_authenticate(None)
        response = self.client.post('/api/account/update/', {'name': 'X'}, format='json')
        self.assertIn(response.status_code, (401, 403))


class UsersListTests(AccountsApiTestCase):
    def test_admin_only(self):
        self.client.force_authenticate(self.user)
        self.assertEqual(self.client.get('/api/users/').status_code, 403)

    def test_admin_lists_users(self):
        staff = User.objects.create_user(
            username='admin@example.com', email='admin@example.com', password='secret123', is_staff=True
        )
        self.client.force_authenticate(staff)

        users = self.client.get('/api/users/').json()['users']

        emails = {u['email']: u for u in users}
        self.assertEqual(emails['olena@example.com']['name'], 'Olena')
        self.assertIn('created_at', emails['olena@example.com'])


class EnsureAdminCommandTests(TestCase):
    @override_settings(ADMIN_EMAIL='Boss@Example.com', ADMIN_PASSWORD='s3cret-pass')
    def test_creates_then_updates_staff_user(self):
        out = StringIO()
        call_command('ensure_admin', stdout=out)
        call_command('ensure_admin', '--password', 'another-pass', stdout=out)

        admin = User.objects.get(username='boss@example.com')
        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.is_superuser)
        self.assertTrue(admin.check_password('another-pass'))
        self.assertIn('Updated admin user', out.getvalue())

    @override_settings(ADMIN_EMAIL='', ADMIN_PASSWORD='')
    def test_requires_credentials(self):
        with self.assertRaises(CommandError):
            call_command('ensure_admin')
