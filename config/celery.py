# Celery is a distributed task queue for running background jobs
#
# - Record tracked lead activity (marketing automation, LEAD → MQL)
#
# Start worker: celery -A config worker -l info
# ==============================================================================

import os
from celery import Celery

# Set the default Django settings module for Celery
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('lifecycle')

# All settings prefixed with 'CELERY_' will be used
# Example: CELERY_BROKER_URL, CELERY_RESULT_BACKEND
app.config_from_object('django.conf:settings', namespace='CELERY')

# Looks for tasks.py file in each app (apps/contacts/tasks.py)
app.autodiscover_tasks()


# CELERY TASK ANNOTATIONS

app.conf.task_annotations = {
    # Tracking server can burst; keep the row locks short and spread out
    'apps.contacts.tasks.process_lead_activity': {
        'rate_limit': '100/m',
    },
}
