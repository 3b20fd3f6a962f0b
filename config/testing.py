import os

SECRET_KEY = "test-secret"

RECORD_STORE = os.getenv("RECORD_STORE", "firestore")

FIREBASE_CONFIG = {
    "credentials": os.getenv("FIREBASE_CREDENTIALS", ""),
    "project_id": os.getenv("FIREBASE_PROJECT_ID", "shift-tracker-test"),
}

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_tracker_test"),
}

RESUME_OPEN_SHIFT = True

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
