#!/usr/bin/env python3
"""Trigger the sign-out-all-users function from the command line.

Does the same thing as the "Sign out all users" button on the CRM settings
page: POSTs to the deployed endpoint with an admin's Cognito access token.

Usage:
    python scripts/sign_out_all_users.py \
        --url https://xxx.execute-api.eu-west-2.amazonaws.com/sign-out-all-users \
        --token eyJraWQiO...

    The token can also be passed through the CRM_ACCESS_TOKEN env var.

Requires:
    - requests
"""

import argparse
import os
import sys

import requests


def invoke(url, token, timeout=300):
    """POST to the endpoint and return (status_code, body dict)."""
    resp = requests.post(
        url,
        headers={
            'Authorization': f'Bearer {token}',
            'Content-Type': 'application/json',
        },
        timeout=timeout,
    )
    try:
        body = resp.json()
    except ValueError:
        body = {'error': resp.text}
    return resp.status_code, body


def main(argv=None):
    parser = argparse.ArgumentParser(description='Sign out every user of the CRM')
    parser.add_argument('--url', required=True, help='sign-out-all-users endpoint URL')
    parser.add_argument('--token', default=os.environ.get('CRM_ACCESS_TOKEN', ''),
                        help='Admin access token (default: $CRM_ACCESS_TOKEN)')
    parser.add_argument('--timeout', type=int, default=300, help='Request timeout in seconds')
    args = parser.parse_args(argv)

    if not args.token:
        print('ERROR: no access token given (--token or CRM_ACCESS_TOKEN)', file=sys.stderr)
        return 2

    try:
        status, body = invoke(args.url, args.token, args.timeout)
    except requests.RequestException as e:
        print(f'ERROR: request failed: {e}', file=sys.stderr)
        return 1

    if status != 200:
        print(f'ERROR ({status}): {body.get("error", "unknown error")}', file=sys.stderr)
        return 1

    print(body.get('message', 'All users have been signed out'))
    for error in body.get('errors', []):
        print(f'  FAILED: {error}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
