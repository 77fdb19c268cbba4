import os
import sys

from dotenv import load_dotenv

from enums.runtime_environment import RuntimeEnvironment

# Variables already in the environment win over .env (tests set them before import)
load_dotenv(".env", override=False)


def _runtime_environment() -> RuntimeEnvironment:
    raw_value = os.environ.get("RUNTIME_ENVIRONMENT", "")
    try:
        return RuntimeEnvironment(raw_value)
    except ValueError:
        choices = " | ".join(env.value for env in RuntimeEnvironment)
        print(f"\n RUNTIME_ENVIRONMENT is {'missing' if not raw_value else repr(raw_value)}, expected one of: {choices}",
              file=sys.stderr)
        print(f" Set it in .env, e.g. RUNTIME_ENVIRONMENT={RuntimeEnvironment.DEV.value}\n", file=sys.stderr)
        sys.exit(1)


RUNTIME_ENVIRONMENT = _runtime_environment()

# Database
DB_URL = os.environ.get("DB_URL", "sqlite+aiosqlite:///data/foodtruck.db")

# HTTP surface
WEBAPP_HOST = os.environ.get("WEBAPP_HOST", "0.0.0.0")
WEBAPP_PORT = int(os.environ.get("WEBAPP_PORT")) if os.environ.get("WEBAPP_PORT") else 8000
CORS_ALLOWED_ORIGINS = os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",") if os.environ.get("CORS_ALLOWED_ORIGINS") else []

# Side-effect collaborators (confirmation email + merchant push)
# Both are serverless functions reached over HTTP; empty URL or key disables them
FUNCTIONS_BASE_URL = os.environ.get("FUNCTIONS_BASE_URL", "").rstrip("/")
SERVICE_ROLE_KEY = os.environ.get("SERVICE_ROLE_KEY", "")
NOTIFICATION_TIMEOUT_SECONDS = float(os.environ.get("NOTIFICATION_TIMEOUT_SECONDS", "5"))
MERCHANT_TIMEZONE = os.environ.get("MERCHANT_TIMEZONE", "Europe/Paris")

# Placeholder email used by the dashboard for counter orders (no customer account)
ANONYMOUS_CUSTOMER_EMAIL = os.environ.get("ANONYMOUS_CUSTOMER_EMAIL", "surplace@local")

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask emails/phones/tokens in logs

# Rotated log files kept, longer in DEV
if RUNTIME_ENVIRONMENT == RuntimeEnvironment.DEV:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "30"))
else:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "5"))
