import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

RECORD_STORE = os.getenv("RECORD_STORE", "firestore")

FIREBASE_CONFIG = {
    "credentials": os.getenv("FIREBASE_CREDENTIALS", ""),
    "project_id": os.getenv("FIREBASE_PROJECT_ID", ""),
}

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_tracker"),
}

RESUME_OPEN_SHIFT = bool(int(os.getenv("RESUME_OPEN_SHIFT", "1")))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
