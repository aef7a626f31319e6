"""Global sign-out of every user in the pool.

One attempt per user. A failed attempt is recorded as "<email>: <error>"
and never stops the remaining attempts.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from botocore.exceptions import BotoCoreError, ClientError

from shared.identity import sign_out_user

logger = logging.getLogger(__name__)


def _error_text(e: Exception) -> str:
    if isinstance(e, ClientError):
        return e.response.get('Error', {}).get('Message') or str(e)
    return str(e) or type(e).__name__


def sign_out_one(cognito, user_pool_id: str, user: dict) -> str | None:
    """Sign out a single user. Returns None on success or a failure detail."""
    email = user.get('email') or user['username']
    try:
        sign_out_user(cognito, user_pool_id, user['username'])
    except (ClientError, BotoCoreError) as e:
        logger.error('Error signing out user %s: %s', email, e)
        return f'{email}: {_error_text(e)}'
    except Exception as e:
        logger.exception('Exception signing out user %s', email)
        return f'{email}: {_error_text(e)}'

    logger.info('Signed out user: %s', email)
    return None


def sign_out_all(cognito, user_pool_id: str, users: list, max_workers: int = 1) -> dict:
    """Attempt a global sign-out for every user and summarise the outcomes.

    With max_workers <= 1 the users are processed in order on the calling
    thread. Otherwise a bounded thread pool runs the attempts; the report is
    built only after every attempt has finished.

    Returns:
        dict with 'signed_out' (int), 'total' (int) and 'errors' (list of str).
    """
    if max_workers <= 1 or len(users) <= 1:
        outcomes = [sign_out_one(cognito, user_pool_id, u) for u in users]
    else:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(users))) as pool:
            outcomes = list(pool.map(lambda u: sign_out_one(cognito, user_pool_id, u), users))

    errors = [o for o in outcomes if o is not None]
    report = {
        'signed_out': len(outcomes) - len(errors),
        'total': len(users),
        'errors': errors,
    }

    logger.info('Sign-out complete. %d/%d users signed out.', report['signed_out'], report['total'])
    return report
