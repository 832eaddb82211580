import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./hr_identity.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    # Password policy
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    PASSWORD_MAX_AGE_DAYS = int(data.get("PASSWORD_MAX_AGE_DAYS", 180))
    PASSWORD_HISTORY_SIZE = int(data.get("PASSWORD_HISTORY_SIZE", 5))
    REVOKE_SESSION_ON_PASSWORD_CHANGE = bool(
        data.get("REVOKE_SESSION_ON_PASSWORD_CHANGE", False)
    )

    # Token lifetimes
    VERIFICATION_TOKEN_TTL_HOURS = int(data.get("VERIFICATION_TOKEN_TTL_HOURS", 24))
    SESSION_TOKEN_TTL_HOURS = int(data.get("SESSION_TOKEN_TTL_HOURS", 2))
    SETUP_TOKEN_TTL_HOURS = int(data.get("SETUP_TOKEN_TTL_HOURS", 24))

    EMPLOYEE_ID_MAX_ATTEMPTS = int(data.get("EMPLOYEE_ID_MAX_ATTEMPTS", 10))

    # Outbound email (logged instead of sent when SMTP_HOST is empty)
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    SMTP_FROM_EMAIL = data.get("SMTP_FROM_EMAIL", "")
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:3000")
