"""
Startup checks for the values read by config.py.

A bad combination (e.g. a functions URL without its service key) stops the
service before it accepts orders, with a message saying what to fix.
"""

import sys
from urllib.parse import urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class ConfigValidationError(Exception):
    pass


def validate_database_url(db_url: str) -> None:
    """
    Validate the SQLAlchemy database URL.

    Raises:
        ConfigValidationError: If the URL is empty or not an async driver URL
    """
    if not db_url:
        raise ConfigValidationError(
            "DB_URL is required but not set!\n"
            "Add to .env: DB_URL=sqlite+aiosqlite:///data/foodtruck.db"
        )
    scheme = db_url.split("://", 1)[0]
    if "+" not in scheme:
        raise ConfigValidationError(
            f"DB_URL must name an async driver (got scheme '{scheme}').\n"
            "Example: sqlite+aiosqlite:///data/foodtruck.db or postgresql+asyncpg://..."
        )


def validate_functions_endpoint(base_url: str, service_key: str) -> None:
    """
    Validate the serverless functions endpoint used for e-mail and push.

    Both values empty disables notifications; one without the other is an error.

    Raises:
        ConfigValidationError: If only one of the two is set or the URL is malformed
    """
    if not base_url and not service_key:
        return
    if base_url and not service_key:
        raise ConfigValidationError(
            "FUNCTIONS_BASE_URL is set but SERVICE_ROLE_KEY is missing!\n"
            "Notifications cannot authenticate without the service key.\n"
            "Add to .env: SERVICE_ROLE_KEY=<your-service-role-key>"
        )
    if service_key and not base_url:
        raise ConfigValidationError(
            "SERVICE_ROLE_KEY is set but FUNCTIONS_BASE_URL is missing!\n"
            "Add to .env: FUNCTIONS_BASE_URL=https://<project>.example.co"
        )
    parsed = urlparse(base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigValidationError(
            f"FUNCTIONS_BASE_URL is not a valid http(s) URL: {base_url}"
        )


def validate_timezone(tz_name: str) -> None:
    """
    Raises:
        ConfigValidationError: If the IANA timezone name is unknown
    """
    try:
        ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigValidationError(
            f"MERCHANT_TIMEZONE '{tz_name}' is not a known IANA timezone.\n"
            "Add to .env: MERCHANT_TIMEZONE=Europe/Paris"
        )


def validate_positive_number(value: float, name: str) -> None:
    if value <= 0:
        raise ConfigValidationError(f"{name} must be greater than 0 (currently: {value})")


def validate_startup_config(config_module) -> None:
    """Run every check against a loaded config module; the first failure raises ConfigValidationError."""
    validate_database_url(config_module.DB_URL)
    validate_functions_endpoint(config_module.FUNCTIONS_BASE_URL, config_module.SERVICE_ROLE_KEY)
    validate_timezone(config_module.MERCHANT_TIMEZONE)
    validate_positive_number(config_module.NOTIFICATION_TIMEOUT_SECONDS, 'NOTIFICATION_TIMEOUT_SECONDS')
    validate_positive_number(config_module.WEBAPP_PORT, 'WEBAPP_PORT')


def validate_or_exit(config_module) -> None:
    """Entry point used by run.py: print the problem and exit with status 1."""
    try:
        validate_startup_config(config_module)
    except ConfigValidationError as e:
        print(f"\n Invalid configuration, the order service was not started:\n\n{e}\n", file=sys.stderr)
        sys.exit(1)
