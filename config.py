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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    # DDL connection for src.worker.schema_manager
    MIGRATION_DB_URI = data.get("MIGRATION_DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Request context headers set by the gateway
    REGION_HEADER = data.get("REGION_HEADER", "X-User-Region")
    ACTOR_HEADER = data.get("ACTOR_HEADER", "X-User-Id")

    # Aggregate Maintenance Configuration
    AGGREGATE_REFRESH_ENABLED = bool(data.get("AGGREGATE_REFRESH_ENABLED", True))
    AGGREGATE_REFRESH_INTERVAL_SECONDS = data.get("AGGREGATE_REFRESH_INTERVAL_SECONDS", 900)  # 15 minutes

    # Budget Reconciliation Configuration
    BUDGET_RECONCILIATION_ENABLED = bool(data.get("BUDGET_RECONCILIATION_ENABLED", True))
    BUDGET_RECONCILIATION_INTERVAL_SECONDS = data.get("BUDGET_RECONCILIATION_INTERVAL_SECONDS", 86400)  # Daily
