# Celery instance is defined in cl_project/celery.py
# Importing it here makes sure the app is loaded when Django starts,
# so @shared_task in contracts_core binds to it
from .celery import celery_app

__all__ = ("celery_app",)

""" Run a worker for the ledger maintenance tasks with:
    "celery -A cl_project worker -l info" """
