import os
import yaml

from billflow.domain.company import CompanyProfile

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./billflow.db")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Google Drive sync through an Apps Script web app (empty = sync disabled)
    GOOGLE_SCRIPT_URL = data.get("GOOGLE_SCRIPT_URL", "")
    DRIVE_SYNC_TIMEOUT = data.get("DRIVE_SYNC_TIMEOUT", 30.0)  # Seconds

    # CSV backup worker
    BACKUP_OUTPUT_DIR = data.get("BACKUP_OUTPUT_DIR", ".")

    # Issuing company, read once and frozen for the process lifetime
    COMPANY = CompanyProfile(**(data.get("COMPANY") or {}))
