import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

# Production credentials come only from the environment (or .env).
DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "ebd"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ebd_db"),
    "timeout": int(os.getenv("DB_TIMEOUT_SECONDS", "5")),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
