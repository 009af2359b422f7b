"""
Tests for the one-time schema setup on the storefront app config.
"""
from unittest import mock

from django.apps import apps
from django.test import SimpleTestCase


class StorefrontSetupTests(SimpleTestCase):
    def setUp(self):
        self.config = apps.get_app_config('storefront')
        self.config.schema_ready = False
        self.addCleanup(setattr, self.config, 'schema_ready', False)

    @mock.patch('storefront.apps.call_command')
    def test_migrates_once(self, call_command):
        self.assertTrue(self.config.setup())
        self.assertFalse(self.config.setup())

        call_command.assert_called_once_with('migrate', interactive=False, verbosity=0)
        self.assertTrue(self.config.schema_ready)

    @mock.patch('storefront.apps.call_command')
    def test_force_runs_again(self, call_command):
        self.config.setup()
        self.assertTrue(self.config.setup(force=True))
        self.assertEqual(call_command.call_count, 2)
