# src/meeting_intel/infrastructure/supabase_client.py
"""
Supabase Client

Provides the Supabase client used by the repositories.

Usage:
    from .supabase_client import get_supabase_client

    client = get_supabase_client()
    result = client.table("action_items").select("*").execute()
"""

import logging
from typing import Optional

from ..config import get_config

logger = logging.getLogger(__name__)

# Singleton client
_supabase_client = None


def get_supabase_client():
    """
    Get the Supabase client singleton.

    Returns:
        Supabase client or None if not configured
    """
    global _supabase_client

    if _supabase_client is not None:
        return _supabase_client

    config = get_config()
    supabase_url = config.supabase_url
    supabase_key = config.supabase_key

    if not supabase_url or not supabase_key:
        logger.warning("Supabase not configured (missing SUPABASE_URL or SUPABASE_KEY)")
        return None

    from supabase import create_client

    try:
        _supabase_client = create_client(supabase_url, supabase_key)
        logger.info(f"Connected to Supabase: {supabase_url}")
        return _supabase_client
    except Exception as e:
        logger.error(f"Failed to connect to Supabase: {e}")
        return None


def set_supabase_client(client: Optional[object]):
    """Install a client explicitly (tests, scripts)."""
    global _supabase_client
    _supabase_client = client
