#!/usr/bin/env python3
"""
Writes a .env file for StudySync with a fresh secret key.
"""

import os
import secrets
import string


def generate_secret_key(length=64):
    alphabet = string.ascii_letters + string.digits + "!@#$%^&*"
    return ''.join(secrets.choice(alphabet) for _ in range(length))


def render_env(secret_key, admin_emails=""):
    return f"""# StudySync environment
DATABASE_URL=sqlite:///./studysync.db
SECRET_KEY={secret_key}
ALGORITHM=HS256
ACCESS_TOKEN_EXPIRE_MINUTES=30
REFRESH_TOKEN_EXPIRE_DAYS=7
ADMIN_EMAILS={admin_emails}
CELERY_BROKER_URL=redis://localhost:6379/0
CELERY_RESULT_BACKEND=redis://localhost:6379/0
LOG_LEVEL=INFO
"""


def main():
    print("🚀 Setting up StudySync...\n")

    if os.path.exists('.env'):
        print("⚠️  .env file already exists. Overwrite it? (y/n): ", end="")
        if input().lower().strip() != 'y':
            print("❌ Setup cancelled.")
            return

    print("Admin emails, comma separated (leave empty for none): ", end="")
    admin_emails = input().strip()

    secret_key = generate_secret_key(64)
    with open('.env', 'w') as f:
        f.write(render_env(secret_key, admin_emails))

    print("✅ Environment setup completed!")
    print(f"🔑 Secret key generated: {secret_key[:20]}...")

    print("\n📋 Next steps:")
    print("1. Install: pip install -e .[test]")
    print("2. Run the API: python run.py")
    print("3. Reminders: python start_celery_worker.py and python start_celery_beat.py")
    print("4. Open http://localhost:8000/docs in your browser")


if __name__ == "__main__":
    main()
