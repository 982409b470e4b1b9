from __future__ import annotations
import os
from celery import Celery

# ensure Django settings are set for Celery
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "cl_project.settings")

celery_app = Celery("cl_project")

# read config from Django settings, using CELERY_ prefix
celery_app.config_from_object("django.conf:settings", namespace="CELERY")

# pick up contracts_core/tasks.py
celery_app.autodiscover_tasks()
