"""Runtime configuration for the CRM admin functions.

Values come from the Lambda environment and are read on every call so a
redeploy of the environment (e.g. rotating the admin allow-list) takes
effect without a code change.
"""

import os

DEFAULT_REGION = 'eu-west-2'
DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_MAX_ATTEMPTS = 2
DEFAULT_MAX_WORKERS = 4


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


def region() -> str:
    return os.environ.get('AWS_REGION', DEFAULT_REGION)


def user_pool_id() -> str:
    return os.environ.get('USER_POOL_ID', '').strip()


def admin_emails() -> frozenset:
    """Return the admin allow-list as a set of lower-cased emails.

    ADMIN_EMAILS is a comma-separated list, e.g.
    ``admin@example.com, Ops@Example.com``.
    """
    raw = os.environ.get('ADMIN_EMAILS', '')
    return frozenset(e.strip().lower() for e in raw.split(',') if e.strip())


def idp_timeout() -> int:
    """Connect/read timeout in seconds for every identity-provider call."""
    return max(_int_env('IDP_TIMEOUT_SECONDS', DEFAULT_TIMEOUT_SECONDS), 1)


def idp_max_attempts() -> int:
    return max(_int_env('IDP_MAX_ATTEMPTS', DEFAULT_MAX_ATTEMPTS), 1)


def max_workers() -> int:
    """Size of the sign-out worker pool. 1 means strictly sequential."""
    return max(_int_env('SIGN_OUT_MAX_WORKERS', DEFAULT_MAX_WORKERS), 1)


def log_level() -> str:
    return os.environ.get('LOG_LEVEL', 'INFO').upper()


def audit_table() -> str:
    return os.environ.get('AUDIT_TABLE', 'crm-admin-dev-audit')
