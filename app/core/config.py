import os

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./events.db")
DATABASE_SCHEMA = os.getenv("DATABASE_SCHEMA", "")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("true", "1", "yes")

# Identity header set by the fronting auth proxy (Entra ID easy auth)
AUTH_IDENTITY_HEADER = os.getenv("AUTH_IDENTITY_HEADER", "X-MS-CLIENT-PRINCIPAL-ID")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def get_database_url():
    return DATABASE_URL


def get_database_schema() -> str | None:
    """Schema holding the event tables and the add_event procedure, if any."""
    return DATABASE_SCHEMA or None


def get_sql_echo():
    return SQL_ECHO


def get_auth_identity_header():
    return AUTH_IDENTITY_HEADER


def get_log_level():
    return LOG_LEVEL
