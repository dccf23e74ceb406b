# Celery is a distributed task queue for running background jobs
#
# - Flag leases that are about to expire
#
# Start worker: celery -A config worker -l info
# Start beat: celery -A config beat -l info
# ==============================================================================

import os
from celery import Celery
from celery.schedules import crontab

# Set the default Django settings module for Celery
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

# 'brokercrm' is the app name (appears in logs and monitoring)
app = Celery('brokercrm')

# All settings prefixed with 'CELERY_' will be used
# Example: CELERY_BROKER_URL, CELERY_RESULT_BACKEND
app.config_from_object('django.conf:settings', namespace='CELERY')

# Looks for tasks.py in each installed app (apps/deals/tasks.py)
app.autodiscover_tasks()


# CELERY BEAT SCHEDULE (Periodic Tasks)
app.conf.beat_schedule = {
    # Renewal reminders for leases inside the critical window
    'flag-expiring-leases': {
        'task': 'apps.deals.tasks.flag_expiring_leases',
        'schedule': crontab(hour=7, minute=0),  # Every day at 7:00 AM
    },
}
