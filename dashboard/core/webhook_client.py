# dashboard/core/webhook_client.py
"""
Outbound webhook dispatch.

Used when the relay runs as its own service (`WEBHOOK_URL` is set): events
are POSTed as JSON to the relay's /webhook endpoint.

Typical .env configuration:

    WEBHOOK_URL=http://localhost:3002/webhook
    WEBHOOK_TIMEOUT=5

No retries. Failures are logged and reported as False so the caller can
carry on.
"""
from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)


def post_event(
    url: str,
    event: dict[str, Any],
    timeout: float | None = None,
    http: requests.Session | None = None,
) -> bool:
    """
    POST one event to an external relay.

    Parameters
    ----------
    url:
        Relay endpoint, e.g. http://localhost:3002/webhook.
    event:
        JSON-serializable payload.
    timeout:
        Seconds to wait; None waits indefinitely.
    http:
        Optional `requests.Session` (tests inject a stub).

    Returns
    -------
    True on a 2xx answer, False otherwise.
    """
    client = http or requests
    try:
        response = client.post(url, json=event, timeout=timeout)
    except requests.RequestException as exc:
        logger.error("Webhook dispatch to %s failed: %s", url, exc)
        return False

    if not response.ok:
        logger.error(
            "Webhook dispatch to %s answered %s", url, response.status_code
        )
        return False
    return True
