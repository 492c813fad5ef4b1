"""
Celery configuration for the restoration validation engine.

Site validation jobs are queued here and picked up by the workers
running `celery -A restoration worker`.
"""
import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'restoration.settings')

app = Celery('restoration')

# Load config from Django settings, using CELERY_ namespace
app.config_from_object('django.conf:settings', namespace='CELERY')

app.autodiscover_tasks()
