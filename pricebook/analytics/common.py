"""
Percent change and JSON cleanup shared by the analytics, report and API modules.
"""
from __future__ import annotations

import datetime as dt
import math
from enum import Enum

import numpy as np
import pandas as pd


def pct_change(current: float, previous: float) -> float | None:
    """(current - previous) / previous * 100, or None when previous is 0 or NaN."""
    if pd.isna(previous) or previous == 0:
        return None
    return (current - previous) / previous * 100


def _finite(value: float) -> float | None:
    return value if math.isfinite(value) else None


def sanitize_for_json(obj):
    """Turn numpy scalars, enums, timestamps and NaN/Inf into plain JSON values.

    Dict keys become strings and None keys are dropped.
    """
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple, np.ndarray)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (bool, np.bool_)):
        return bool(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, (float, np.floating)):
        return _finite(float(obj))
    if isinstance(obj, (dt.date, dt.datetime, pd.Timestamp)):
        return None if pd.isna(obj) else obj.isoformat()
    if obj is pd.NaT or obj is pd.NA:
        return None
    return obj
