"""Cognito user pool access for the admin functions.

Caller verification uses the caller's own access token. Listing users and
global sign-out use the Lambda execution role (the service credential), so
they work for every user in the pool regardless of who is calling.
"""

import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from shared import config
from shared.errors import Unauthenticated, UpstreamError

logger = logging.getLogger(__name__)


def cognito_client():
    """Build a cognito-idp client with bounded timeouts and retries."""
    return boto3.client(
        'cognito-idp',
        region_name=config.region(),
        config=Config(
            connect_timeout=config.idp_timeout(),
            read_timeout=config.idp_timeout(),
            retries={'max_attempts': config.idp_max_attempts(), 'mode': 'standard'},
        ),
    )


def _attribute(attributes: list, name: str) -> str:
    for attr in attributes or []:
        if attr.get('Name') == name:
            return attr.get('Value', '')
    return ''


def _to_identity(username: str, attributes: list) -> dict:
    return {
        'username': username,
        'email': (_attribute(attributes, 'email') or username).strip(),
    }


def verify_caller(cognito, access_token: str) -> dict:
    """Resolve a bearer access token to the caller's identity.

    The email is returned only when Cognito marks it verified; users can
    edit their own email attribute, so anything else is reported as ''.
    There is no fallback to the username.

    Raises:
        Unauthenticated: Cognito rejected the token.
        UpstreamError: Cognito could not be reached.
    """
    try:
        resp = cognito.get_user(AccessToken=access_token)
    except ClientError as e:
        logger.error('User verification error: %s', e)
        raise Unauthenticated('Unauthorized') from e
    except BotoCoreError as e:
        logger.error('User verification failed to reach Cognito: %s', e)
        raise UpstreamError('Failed to verify caller') from e

    attributes = resp.get('UserAttributes')
    verified = _attribute(attributes, 'email_verified').lower() == 'true'
    return {
        'username': resp['Username'],
        'email': _attribute(attributes, 'email').strip() if verified else '',
    }


def list_all_users(cognito, user_pool_id: str) -> list[dict]:
    """Return every user in the pool, following pagination to the end.

    Raises:
        UpstreamError: any page failed; no partial result is returned.
    """
    if not user_pool_id:
        raise UpstreamError('User pool ID not configured')

    users = []
    try:
        paginator = cognito.get_paginator('list_users')
        for page in paginator.paginate(UserPoolId=user_pool_id):
            for user in page.get('Users', []):
                users.append(_to_identity(user['Username'], user.get('Attributes')))
    except (ClientError, BotoCoreError) as e:
        logger.error('Error listing users: %s', e)
        raise UpstreamError('Failed to list users') from e

    return users


def sign_out_user(cognito, user_pool_id: str, username: str) -> None:
    """Revoke every session of a user on every device.

    Succeeds for users that have no active sessions. Cognito errors
    propagate to the caller.
    """
    cognito.admin_user_global_sign_out(
        UserPoolId=user_pool_id,
        Username=username,
    )
