import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "firestore" (default) or "mysql"
RECORD_STORE = os.getenv("RECORD_STORE", "firestore")

FIREBASE_CONFIG = {
    # Path to a service account JSON; empty means Application Default Credentials.
    "credentials": os.getenv("FIREBASE_CREDENTIALS", "serviceAccountKey.json"),
    "project_id": os.getenv("FIREBASE_PROJECT_ID", ""),
}

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_tracker"),
}

# On login, adopt a shift left open in the store by an earlier session.
RESUME_OPEN_SHIFT = bool(int(os.getenv("RESUME_OPEN_SHIFT", "1")))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled (mysql backend only), apply database/schema.sql on startup.
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
