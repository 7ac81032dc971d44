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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./workshop.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Shared secret expected as "Authorization: Bearer <secret>" on cron endpoints
    CRON_SECRET = data.get("CRON_SECRET", "")

    # Notification queue worker
    NOTIFICATION_MAX_RETRIES = data.get("NOTIFICATION_MAX_RETRIES", 3)
    NOTIFICATION_BATCH_SIZE = data.get("NOTIFICATION_BATCH_SIZE", 50)
    NOTIFICATION_INTERVAL_SECONDS = data.get("NOTIFICATION_INTERVAL_SECONDS", 300)  # 5 minutes
    MESSAGING_TIMEOUT_SECONDS = float(data.get("MESSAGING_TIMEOUT_SECONDS", 5.0))

    # Invoicing
    OVERPAYMENT_POLICY = data.get("OVERPAYMENT_POLICY", "reject")  # reject | allow
    INVOICE_DUE_DAYS = data.get("INVOICE_DUE_DAYS", 30)
    INVOICE_NUMBER_PREFIX = data.get("INVOICE_NUMBER_PREFIX", "INV-")
    OVERDUE_CHECK_INTERVAL_SECONDS = data.get("OVERDUE_CHECK_INTERVAL_SECONDS", 86400)  # Daily
    COMPANY_NAME = data.get("COMPANY_NAME", "Workshop")
    COMPANY_ADDRESS = data.get("COMPANY_ADDRESS", "")
