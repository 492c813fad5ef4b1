"""
Test runner that keeps validation engine logging quiet during `manage.py test`.
"""
import logging
import os

from django.test.runner import DiscoverRunner


class CleanupTestRunner(DiscoverRunner):
    """Test runner that silences noisy loggers and marks the environment as testing."""

    loggers_to_suppress = [
        'restoration',
        'django.db.backends',
        'django.request',
        'celery',
    ]

    def setup_test_environment(self, **kwargs):
        os.environ['TESTING'] = 'True'
        super().setup_test_environment(**kwargs)

        for logger_name in self.loggers_to_suppress:
            logging.getLogger(logger_name).setLevel(logging.CRITICAL)

    def teardown_test_environment(self, **kwargs):
        os.environ.pop('TESTING', None)
        super().teardown_test_environment(**kwargs)
