import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./clinic_auth.db")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Session lifetimes (hours)
    SESSION_TTL_HOURS = int(data.get("SESSION_TTL_HOURS", 24))
    REMEMBER_ME_TTL_HOURS = int(data.get("REMEMBER_ME_TTL_HOURS", 24 * 7))
    PATIENT_SESSION_TTL_HOURS = int(data.get("PATIENT_SESSION_TTL_HOURS", 24 * 3))
    IMPERSONATION_TTL_HOURS = int(data.get("IMPERSONATION_TTL_HOURS", 2))
    MAX_EXTEND_HOURS = int(data.get("MAX_EXTEND_HOURS", 24 * 30))

    # Passwords
    MIN_PASSWORD_LENGTH = int(data.get("MIN_PASSWORD_LENGTH", 8))
    TEMP_PASSWORD_LENGTH = int(data.get("TEMP_PASSWORD_LENGTH", 20))
    ARGON2_TIME_COST = int(data.get("ARGON2_TIME_COST", 3))
    ARGON2_MEMORY_COST = int(data.get("ARGON2_MEMORY_COST", 65536))
    ARGON2_PARALLELISM = int(data.get("ARGON2_PARALLELISM", 4))
    HASH_WORKERS = int(data.get("HASH_WORKERS", 4))

    # Background last_seen_at updates
    TOUCH_TIMEOUT_SECONDS = float(data.get("TOUCH_TIMEOUT_SECONDS", 5.0))
