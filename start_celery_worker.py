#!/usr/bin/env python3
"""
Start Celery Worker for StudySync reminders
"""

import sys
from studysync.celery_app import celery_app

if __name__ == "__main__":
    print("Starting Celery Worker for StudySync...")
    print("This will process deadline reminder tasks")
    print("Press Ctrl+C to stop")

    try:
        celery_app.start(['worker', '--loglevel=info'])
    except KeyboardInterrupt:
        print("\nStopping Celery Worker...")
        sys.exit(0)
