"""
Logging setup for the order service.

Root logger gets a console handler and a file handler rotated at midnight
(logs/foodtruck.log). Customer e-mails, phone numbers and credentials are
redacted from every record when LOG_MASK_SECRETS is enabled.
"""

import logging
import logging.handlers
import re
from pathlib import Path
from typing import Pattern

import config

LOG_FORMAT = '%(asctime)s | %(name)-25s | %(levelname)-8s | %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_FILE = Path("logs") / "foodtruck.log"


class SecretMaskingFilter(logging.Filter):
    """
    Replace PII and credentials in log records with [REDACTED_*] markers.

    Covers service/API keys, bearer tokens, JWTs, e-mail addresses and
    phone numbers (international and French national formats). Order ids,
    amounts and foodtruck ids are left untouched.
    """

    PATTERNS: list[tuple[Pattern, str]] = [
        # Keys and tokens
        (re.compile(r'(api[_-]?key["\']?\s*[:=]\s*["\']?)([A-Za-z0-9_\-]{20,})(["\']?)', re.IGNORECASE), r'\1[REDACTED_API_KEY]\3'),
        (re.compile(r'(service[_-]?role[_-]?key["\']?\s*[:=]\s*["\']?)([A-Za-z0-9_\-\.]{20,})(["\']?)', re.IGNORECASE), r'\1[REDACTED_SERVICE_KEY]\3'),
        (re.compile(r'(token["\']?\s*[:=]\s*["\']?)([A-Za-z0-9_\-:]{20,})(["\']?)', re.IGNORECASE), r'\1[REDACTED_TOKEN]\3'),
        (re.compile(r'(Bearer\s+)([A-Za-z0-9_\-\.]+)', re.IGNORECASE), r'\1[REDACTED_BEARER_TOKEN]'),
        (re.compile(r'\beyJ[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+'), '[REDACTED_JWT]'),

        # Customer contact details
        (re.compile(r'\b([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})\b'), '[REDACTED_EMAIL]'),
        (re.compile(r'(?<![\w-])\+\d{1,3}(?:[\s.-]?\d){8,12}\b'), '[REDACTED_PHONE]'),
        (re.compile(r'(?<![\w-])0[1-9](?:[\s.-]?\d{2}){4}\b'), '[REDACTED_PHONE]'),
    ]

    @classmethod
    def mask(cls, text: str) -> str:
        for pattern, replacement in cls.PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        # Records are rewritten in place, never dropped
        if record.msg:
            record.msg = self.mask(str(record.msg))
        if record.args and isinstance(record.args, tuple):
            record.args = tuple(self.mask(arg) if isinstance(arg, str) else arg for arg in record.args)
        return True


def _configure_handler(handler: logging.Handler, level: int, mask_secrets: bool) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler.setLevel(level)
    if mask_secrets:
        handler.addFilter(SecretMaskingFilter())
    return handler


def setup_logging():
    """
    Install the root handlers. Called once from run.py, before the app is imported.

    Level, retention (days of rotated files kept) and masking come from
    config.LOG_LEVEL, config.LOG_RETENTION_DAYS and config.LOG_MASK_SECRETS.
    Handlers installed earlier are replaced.
    """
    level_name = config.LOG_LEVEL.upper()
    level = getattr(logging, level_name, logging.INFO)
    LOG_FILE.parent.mkdir(exist_ok=True)

    handlers = [
        _configure_handler(
            logging.handlers.TimedRotatingFileHandler(
                filename=LOG_FILE,
                when="midnight",
                backupCount=config.LOG_RETENTION_DAYS,
                encoding="utf-8"
            ),
            level, config.LOG_MASK_SECRETS
        ),
        _configure_handler(logging.StreamHandler(), level, config.LOG_MASK_SECRETS),
    ]

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.info(f"[Logging] Level={level_name}, retention={config.LOG_RETENTION_DAYS} days, "
                 f"masking={'on' if config.LOG_MASK_SECRETS else 'off'}")
