#!/usr/bin/env python3
"""
Start Celery Beat for StudySync reminder scheduling
"""

import sys
from studysync.celery_app import celery_app

if __name__ == "__main__":
    print("Starting Celery Beat for StudySync...")
    print("This will check for due reminders every five minutes")
    print("Press Ctrl+C to stop")

    try:
        celery_app.start(['beat', '--loglevel=info'])
    except KeyboardInterrupt:
        print("\nStopping Celery Beat...")
        sys.exit(0)
