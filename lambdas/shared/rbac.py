"""Admin allow-list enforcement for the CRM admin functions.

The allow-list is injected through the ADMIN_EMAILS environment value
(see shared.config). Comparison is case-insensitive.
"""

import logging

from shared import config
from shared.errors import Forbidden

logger = logging.getLogger(__name__)


def is_admin(email: str, allow_list: frozenset = None) -> bool:
    """Check whether an email is on the admin allow-list."""
    if allow_list is None:
        allow_list = config.admin_emails()
    return bool(email) and email.strip().lower() in allow_list


def require_admin(caller: dict, operation: str = 'sign-out-all') -> None:
    """Raise Forbidden unless the caller is an admin.

    Args:
        caller: Identity dict from shared.identity.verify_caller.
        operation: Name used in the audit log lines.
    """
    email = caller.get('email', '')
    if not is_admin(email):
        logger.warning('Non-admin user attempted %s: %s', operation, email)
        raise Forbidden('Only admins can perform this action')

    logger.info('Admin user initiating %s: %s', operation, email)
