"""Celery app for background work (currently the audit trail writer).

Run a worker with ``celery -A config worker -l info`` from ``src/``.
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("cargo")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
