"""
Helper Functions

This module contains utility functions used throughout the plugin.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil import parser as dtparser

from alb_metrics.models.data_models import Dimension


def parse_ts(x: Any) -> Optional[datetime]:
    """Parse timestamp from datetime or string, always UTC-aware"""
    if not x:
        return None
    if isinstance(x, datetime):
        dt = x
    else:
        try:
            dt = dtparser.isoparse(str(x))
        except (ValueError, OverflowError):
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def safe_float(x: Any) -> Optional[float]:
    """Safely convert to float"""
    try:
        return float(x) if x is not None else None
    except (TypeError, ValueError):
        return None


def to_dimensions(raw: List[Dict[str, Any]]) -> List[Dimension]:
    """Convert wire-level [{"Name", "Value"}] into Dimension objects"""
    return [Dimension(name=str(d.get("Name", "")), value=str(d.get("Value", ""))) for d in raw]
