"""Shared fixtures and helpers for the CRM admin function tests."""

import json
import os
import sys
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

# ---------------------------------------------------------------------------
# Path setup: make lambdas/ and scripts/ importable as top-level packages
# ---------------------------------------------------------------------------
_repo_root = os.path.join(os.path.dirname(__file__), '..')
_lambdas_dir = os.path.join(_repo_root, 'lambdas')
_scripts_dir = os.path.join(_repo_root, 'scripts')
sys.path.insert(0, _lambdas_dir)
sys.path.insert(0, _scripts_dir)

os.environ.setdefault('AWS_REGION', 'eu-west-2')
os.environ.setdefault('AWS_DEFAULT_REGION', 'eu-west-2')

ADMIN_EMAIL = 'admin@merchanthaus.io'
POOL_ID = 'eu-west-2_test'


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------
@pytest.fixture
def admin_env(monkeypatch):
    """Configure the allow-list and pool for a sign-out run."""
    monkeypatch.setenv('ADMIN_EMAILS', f'{ADMIN_EMAIL}, Darryn@MerchantHaus.io')
    monkeypatch.setenv('USER_POOL_ID', POOL_ID)
    monkeypatch.setenv('SIGN_OUT_MAX_WORKERS', '1')


# ---------------------------------------------------------------------------
# Helpers — Cognito doubles
# ---------------------------------------------------------------------------
def client_error(code='NotAuthorizedException', message='Access Token has been revoked',
                 operation='GetUser'):
    return ClientError({'Error': {'Code': code, 'Message': message}}, operation)


def cognito_user(username, email=None):
    """Build a user entry as returned by cognito-idp list_users."""
    attrs = [{'Name': 'sub', 'Value': f'sub-{username}'}]
    if email:
        attrs.append({'Name': 'email', 'Value': email})
    return {'Username': username, 'Attributes': attrs, 'Enabled': True}


def make_cognito(caller_email=ADMIN_EMAIL, users=None, pages=None, email_verified='true'):
    """Build a MagicMock cognito-idp client.

    ``users`` is served as a single list_users page; ``pages`` lets a test
    spell out several pages explicitly. Pass ``email_verified=None`` to
    omit the attribute from the caller.
    """
    cognito = MagicMock()
    caller_attrs = [{'Name': 'email', 'Value': caller_email}]
    if email_verified is not None:
        caller_attrs.append({'Name': 'email_verified', 'Value': email_verified})
    cognito.get_user.return_value = {
        'Username': 'caller-uuid',
        'UserAttributes': caller_attrs,
    }
    if pages is None:
        pages = [{'Users': users or []}]
    cognito.get_paginator.return_value.paginate.return_value = pages
    cognito.admin_user_global_sign_out.return_value = {}
    return cognito


# ---------------------------------------------------------------------------
# Helper — build API Gateway HTTP API v2 events
# ---------------------------------------------------------------------------
def make_apigw_event(method='POST', token='caller-token', headers=None, body=None):
    """Build a minimal API Gateway HTTP API v2 event.

    Pass ``token=None`` to omit the Authorization header.
    """
    event_headers = {'content-type': 'application/json'}
    if token is not None:
        event_headers['authorization'] = f'Bearer {token}'
    event_headers.update(headers or {})

    event = {
        'rawPath': '/sign-out-all-users',
        'headers': event_headers,
        'requestContext': {
            'http': {'method': method},
        },
    }
    if body is not None:
        event['body'] = json.dumps(body)
        event['isBase64Encoded'] = False
    return event
