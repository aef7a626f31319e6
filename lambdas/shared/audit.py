"""Audit trail for CRM admin actions.

Writes one record per decided admin request to DynamoDB so bulk sign-outs
can be traced back to the admin who triggered them.
"""

import boto3
import time
import uuid
from datetime import datetime, timezone

from shared import config

_dynamodb = boto3.resource('dynamodb', region_name=config.region())


def _table():
    """Return the audit table named by the current AUDIT_TABLE setting."""
    return _dynamodb.Table(config.audit_table())


def _year_month(ts: int) -> str:
    """Return 'YYYY-MM' string for a Unix timestamp."""
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime('%Y-%m')


def log_action(
    user: str,
    action: str,
    target: str,
    result: str,
    details: dict = None
) -> dict:
    """Write an audit record to DynamoDB.

    Args:
        user: Email of the caller.
        action: Action identifier (e.g. 'sign-out-all-users').
        target: What was targeted (e.g. the user pool id).
        result: Outcome ('success', 'failed', 'denied').
        details: Additional context dict, e.g. sweep counts.

    Returns:
        The audit record dict (including the generated 'id').
    """
    ts = int(time.time())
    record = {
        'id': str(uuid.uuid4()),
        'timestamp': ts,
        'year_month': _year_month(ts),
        'user': user,
        'action': action,
        'target': target,
        'result': result,
    }

    if details:
        record['details'] = details

    _table().put_item(Item=record)
    return record
