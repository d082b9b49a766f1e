# src/meeting_intel/api/v1/auth.py
"""
Shared-secret check for machine callers (cron, email dispatcher).
"""

from typing import Optional

from fastapi import HTTPException

from ...config import get_config


def check_cron_api_key(api_key: Optional[str]):
    """Reject the call when a cron key is configured and does not match."""
    expected = get_config().cron_api_key
    if expected and api_key != expected:
        raise HTTPException(status_code=401, detail="Unauthorized")
