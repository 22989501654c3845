"""
Celery configuration for StudySync with beat scheduling
"""

import os

from celery import Celery
from celery.schedules import crontab
from dotenv import load_dotenv

load_dotenv()

BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", BROKER_URL)

# Create Celery app
celery_app = Celery(
    "studysync",
    broker=BROKER_URL,
    backend=RESULT_BACKEND,
    include=["studysync.celery_tasks"]
)

# Basic configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
)

# Beat schedule configuration
celery_app.conf.beat_schedule = {
    'dispatch-due-reminders': {
        'task': 'studysync.celery_tasks.dispatch_due_reminders',
        'schedule': crontab(minute='*/5'),
    },
}

if __name__ == "__main__":
    celery_app.start()
