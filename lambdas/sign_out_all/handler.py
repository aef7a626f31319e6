"""Sign-out-all-users Lambda handler.

Invoked from the CRM settings page. Verifies the caller's bearer token
against Cognito, checks the caller against the admin allow-list, then
revokes the sessions of every user in the pool.
"""

import json
import logging
import os
import sys

# Add parent dir to path for shared modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from shared import config
from shared.audit import log_action
from shared.errors import SignOutError, Unauthenticated
from shared.identity import cognito_client, verify_caller, list_all_users
from shared.rbac import require_admin
from sign_out_all.sweep import sign_out_all

logger = logging.getLogger()
logger.setLevel(config.log_level())

ACTION_ID = 'sign-out-all-users'
AUDIT_MAX_ERRORS = 100

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'authorization, x-client-info, apikey, content-type',
}


def lambda_handler(event, context):
    """Main handler for API Gateway (HTTP API v2 or REST v1) events."""
    if _method(event) == 'OPTIONS':
        return _response(200, None)

    try:
        token = _bearer_token(event)
        cognito = cognito_client()
        caller = verify_caller(cognito, token)

        try:
            require_admin(caller)
        except SignOutError:
            _audit(caller['email'], 'denied')
            raise

        user_pool_id = config.user_pool_id()
        try:
            users = list_all_users(cognito, user_pool_id)
        except SignOutError as e:
            _audit(caller['email'], 'failed', {'error': e.message})
            raise
        logger.info('Found %d users to sign out', len(users))

        report = sign_out_all(cognito, user_pool_id, users, config.max_workers())
        _audit(caller['email'], 'success', _audit_details(report))
        return _response(200, _report_body(report))

    except SignOutError as e:
        return _response(e.status_code, {'error': e.message})
    except Exception as e:
        logger.exception('Sign out all users error')
        return _response(500, {'error': str(e) or 'Unknown error'})


def _report_body(report):
    """Build the 200 response body from a sweep report."""
    body = {
        'success': True,
        'message': f"Successfully signed out {report['signed_out']} of {report['total']} users",
        'signedOutCount': report['signed_out'],
        'totalUsers': report['total'],
    }
    if report['errors']:
        body['errors'] = report['errors']
    return body


def _audit_details(report):
    """Summarise a sweep report for the audit record.

    DynamoDB items are capped at 400 KB, so only the first
    AUDIT_MAX_ERRORS failure strings are kept alongside the full count.
    """
    return {
        'signed_out': report['signed_out'],
        'total': report['total'],
        'error_count': len(report['errors']),
        'errors': report['errors'][:AUDIT_MAX_ERRORS],
    }


def _method(event):
    http = event.get('requestContext', {}).get('http', {})
    return (http.get('method') or event.get('httpMethod') or '').upper()


def _header(event, name):
    """Case-insensitive header lookup."""
    for key, value in (event.get('headers') or {}).items():
        if key.lower() == name:
            return value
    return None


def _bearer_token(event):
    """Extract the caller's bearer token from the Authorization header."""
    auth_header = _header(event, 'authorization')
    if not auth_header:
        raise Unauthenticated('No authorization header')

    scheme, _, token = auth_header.strip().partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        raise Unauthenticated('Unauthorized')
    return token.strip()


def _audit(user_email, result, details=None):
    """Record the outcome; an audit failure never changes the response."""
    try:
        log_action(user_email, ACTION_ID, config.user_pool_id(), result, details=details)
    except Exception:
        logger.exception('Failed to write audit record for %s', user_email)


def _response(status_code, body):
    """Return API Gateway response with CORS headers."""
    return {
        'statusCode': status_code,
        'headers': {**CORS_HEADERS, 'Content-Type': 'application/json'},
        'body': json.dumps(body) if body is not None else '',
    }
